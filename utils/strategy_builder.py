# utils/strategy_builder.py

"""
Provides the heuristic registry and a builder for ILS experiment grids.

This module decouples the *definition* of an experiment (which
heuristics and parameter values to try) from the *generation* of the
full grid of iterated local search configurations.
"""

import itertools
import random
from typing import Any, Callable, Dict, List, Optional, Sequence

from heuristics.base import SATHeuristic
from heuristics.hill_climbing import SingleBitHillClimbing, SteepestDescentHillClimbing
from heuristics.random_bit_flip import RandomBitFlip
from problems.exceptions import ConfigurationError
from search_methods.iterated_local_search import IteratedLocalSearch
from utils.config import IteratedLocalSearchConfig

# Every heuristic that can be named in a configuration
HEURISTICS: Dict[str, Callable[[random.Random], SATHeuristic]] = {
    RandomBitFlip.name: RandomBitFlip,
    SingleBitHillClimbing.name: SingleBitHillClimbing,
    SteepestDescentHillClimbing.name: SteepestDescentHillClimbing,
}


def create_heuristic(name: str, rng: random.Random) -> SATHeuristic:
    """
    Builds the heuristic registered under `name`.

    Raises:
        ConfigurationError: If no heuristic has that name.
    """
    try:
        heuristic_class = HEURISTICS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown heuristic '{name}'. Known heuristics: {sorted(HEURISTICS)}"
        ) from None
    return heuristic_class(rng)


def get_sat_heuristic(
    heuristic_id: int,
    rng: random.Random,
    heuristic_names: Sequence[str]
) -> SATHeuristic:
    """
    Resolves a heuristic ID against the heuristics configured for a lab.

    Args:
        heuristic_id (int): Index into `heuristic_names`.
        rng (random.Random): The trial's random source.
        heuristic_names (Sequence[str]): The configured heuristics, in ID order.

    Raises:
        ConfigurationError: If the ID is outside the configured range.
    """
    if not 0 <= heuristic_id < len(heuristic_names):
        raise ConfigurationError(
            f"Heuristic ID {heuristic_id} requested but only "
            f"{len(heuristic_names)} heuristic(s) are configured "
            f"(valid IDs: 0..{len(heuristic_names) - 1})."
        )
    return create_heuristic(heuristic_names[heuristic_id], rng)


def ils_factory(config: IteratedLocalSearchConfig) -> Callable[[random.Random], IteratedLocalSearch]:
    """
    Returns a function that builds a fresh ILS for a trial's random source.

    The heuristic names are checked immediately, so a typo fails at
    startup and not inside the first trial.
    """
    for name in (config.mutation, config.local_search):
        if name not in HEURISTICS:
            raise ConfigurationError(
                f"Unknown heuristic '{name}'. Known heuristics: {sorted(HEURISTICS)}"
            )

    def build(rng: random.Random) -> IteratedLocalSearch:
        return IteratedLocalSearch(
            mutation=create_heuristic(config.mutation, rng),
            local_search=create_heuristic(config.local_search, rng),
            intensity_of_mutation=config.intensity_of_mutation,
            depth_of_search=config.depth_of_search,
        )

    return build


class StrategyGridBuilder:
    """
    Builds a grid of ILS configurations (recipes).

    This class takes lists of heuristic names and parameter values and
    assembles their Cartesian product into named "recipe" dictionaries
    ready to be consumed by the ILS lab script.
    """

    def __init__(self,
                 mutation_ops: Sequence[str],
                 local_search_ops: Sequence[str]
                ):
        """
        Initializes the builder with the heuristics to combine.

        Args:
            mutation_ops: Names of the perturbation heuristics.
            local_search_ops: Names of the intensification heuristics.

        Raises:
            ConfigurationError: If a name is not a registered heuristic.
        """
        for name in itertools.chain(mutation_ops, local_search_ops):
            if name not in HEURISTICS:
                raise ConfigurationError(
                    f"Unknown heuristic '{name}'. Known heuristics: {sorted(HEURISTICS)}"
                )
        self.mutation_ops = list(mutation_ops)
        self.local_search_ops = list(local_search_ops)

    def build_grid(self,
                   intensities: Sequence[int],
                   depths: Sequence[int],
                   include: Optional[Callable[[IteratedLocalSearchConfig], bool]] = None
                  ) -> List[Dict[str, Any]]:
        """
        Builds the final, complete grid of ILS recipes.

        Args:
            intensities: Intensity of mutation values to try.
            depths: Depth of search values to try.
            include (optional): Filter deciding which configurations
                are kept. Defaults to keeping all of them.

        Returns:
            List[Dict[str, Any]]: Each recipe has a 'name', its 'config'
            (an IteratedLocalSearchConfig) and a 'factory' building the
            search method for a trial.

        Raises:
            ValueError: If the grid ends up empty.
        """
        final_grid = []

        # Cartesian product: (Mutation x Local search x IOM x DOS)
        for mutation, local_search, iom, dos in itertools.product(
                self.mutation_ops, self.local_search_ops, intensities, depths):

            config = IteratedLocalSearchConfig(
                intensity_of_mutation=iom,
                depth_of_search=dos,
                mutation=mutation,
                local_search=local_search,
            )
            if include is not None and not include(config):
                continue

            final_grid.append({
                "name": f"ILS_{mutation}_{local_search}_IOM{iom}_DOS{dos}",
                "config": config,
                "factory": ils_factory(config),
            })

        if not final_grid:
            raise ValueError(
                "No ILS strategies were generated. Check that the heuristic "
                "and parameter lists are not empty and the filter keeps something."
            )
        return final_grid

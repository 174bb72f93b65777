# problems/instances.py

"""
Loads MAX-SAT instances from DIMACS CNF files.

Instances live in 'data/sat_instances/' and are addressed by an integer
instance ID: the position of the file in the sorted directory listing.
A small random k-SAT generator is included for experiments and tests
that do not need a file on disk.
"""

import glob
import os
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from problems.exceptions import ConfigurationError, InstanceFormatError

# Default location of the instance files, relative to the project root
DEFAULT_INSTANCE_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), '..', 'data', 'sat_instances')
)

DOMAIN_NAME = "SAT"


@dataclass(frozen=True)
class SATInstance:
    """
    Immutable structure of a MAX-SAT instance.

    Attributes:
        num_variables (int): Number of boolean decision variables.
        clauses (Tuple[Tuple[int, ...], ...]): Clauses as DIMACS literals,
            i.e. `v` for variable v (1-based) and `-v` for its negation.
        instance_id (int): The ID the instance was loaded with.
        name (str): A human-readable name (usually the file name).
    """
    num_variables: int
    clauses: Tuple[Tuple[int, ...], ...]
    instance_id: int = -1
    name: str = "unnamed"

    def __post_init__(self):
        if self.num_variables < 0:
            raise InstanceFormatError(
                f"Number of variables cannot be negative, got {self.num_variables}."
            )
        for clause in self.clauses:
            for literal in clause:
                if literal == 0 or abs(literal) > self.num_variables:
                    raise InstanceFormatError(
                        f"Literal {literal} in clause {clause} is outside "
                        f"the variable range 1..{self.num_variables}."
                    )

    @property
    def num_clauses(self) -> int:
        return len(self.clauses)

    @property
    def domain(self) -> str:
        return DOMAIN_NAME


def parse_dimacs(path: str, instance_id: int = -1) -> SATInstance:
    """
    Parses a DIMACS CNF file.

    Comment lines ('c') are skipped, the problem line ('p cnf V C')
    gives the variable count, and clauses are 0-terminated literal lists
    which may span several lines. A trailing '%' line (as written by some
    generators) ends the clause section.

    Args:
        path (str): Path to the .cnf file.
        instance_id (int, optional): The ID to record on the instance.

    Returns:
        SATInstance: The parsed instance.

    Raises:
        InstanceFormatError: If the problem line is missing or malformed,
            or the clause count does not match the header.
    """
    num_variables: Optional[int] = None
    declared_clauses: Optional[int] = None
    clauses: List[Tuple[int, ...]] = []
    pending: List[int] = []

    with open(path, 'r') as f:
        for line_no, raw_line in enumerate(f, start=1):
            line = raw_line.strip()
            if not line or line.startswith('c'):
                continue
            if line.startswith('%'):
                break
            if line.startswith('p'):
                fields = line.split()
                if len(fields) != 4 or fields[1] != 'cnf':
                    raise InstanceFormatError(
                        f"{path}:{line_no}: malformed problem line '{line}'"
                    )
                try:
                    num_variables, declared_clauses = int(fields[2]), int(fields[3])
                except ValueError:
                    raise InstanceFormatError(
                        f"{path}:{line_no}: malformed problem line '{line}'"
                    ) from None
                continue

            if num_variables is None:
                raise InstanceFormatError(
                    f"{path}:{line_no}: clause found before the 'p cnf' line"
                )
            try:
                literals = [int(token) for token in line.split()]
            except ValueError:
                raise InstanceFormatError(
                    f"{path}:{line_no}: non-integer literal in '{line}'"
                ) from None

            for literal in literals:
                if literal == 0:
                    clauses.append(tuple(pending))
                    pending = []
                else:
                    pending.append(literal)

    if num_variables is None:
        raise InstanceFormatError(f"{path}: missing 'p cnf' problem line")

    # A last clause without its terminating 0
    if pending:
        clauses.append(tuple(pending))

    if declared_clauses is not None and declared_clauses != len(clauses):
        raise InstanceFormatError(
            f"{path}: header declares {declared_clauses} clauses "
            f"but {len(clauses)} were read"
        )

    return SATInstance(
        num_variables=num_variables,
        clauses=tuple(clauses),
        instance_id=instance_id,
        name=os.path.basename(path),
    )


def list_instance_files(directory: str = DEFAULT_INSTANCE_DIR) -> List[str]:
    """Returns the .cnf files of `directory`, sorted so IDs are stable."""
    return sorted(glob.glob(os.path.join(directory, "*.cnf")))


def load_instance(instance_id: int, directory: str = DEFAULT_INSTANCE_DIR) -> SATInstance:
    """
    Loads the instance with the given ID from `directory`.

    Raises:
        FileNotFoundError: If the directory holds no .cnf files.
        ConfigurationError: If the ID is outside the available range.
    """
    files = list_instance_files(directory)
    if not files:
        raise FileNotFoundError(f"No .cnf instance files found in {directory}")
    if not 0 <= instance_id < len(files):
        raise ConfigurationError(
            f"Instance ID {instance_id} is out of range: "
            f"valid IDs are 0..{len(files) - 1} in {directory}"
        )
    return parse_dimacs(files[instance_id], instance_id=instance_id)


def generate_random_instance(
    num_variables: int,
    num_clauses: int,
    rng: random.Random,
    k: int = 3,
    instance_id: int = -1
) -> SATInstance:
    """
    Generates a uniform random k-SAT instance.

    Each clause draws `k` distinct variables and negates each with
    probability 0.5.

    Args:
        num_variables (int): Number of variables (must be >= k when
            clauses are requested).
        num_clauses (int): Number of clauses.
        rng (random.Random): Source of randomness.
        k (int, optional): Literals per clause. Defaults to 3.
        instance_id (int, optional): The ID to record on the instance.

    Returns:
        SATInstance: The generated instance.
    """
    if num_clauses > 0 and num_variables < k:
        raise ConfigurationError(
            f"Cannot draw {k} distinct variables from {num_variables}."
        )

    clauses: List[Tuple[int, ...]] = []
    for _ in range(num_clauses):
        variables: Sequence[int] = rng.sample(range(1, num_variables + 1), k)
        clauses.append(tuple(v if rng.random() < 0.5 else -v for v in variables))

    return SATInstance(
        num_variables=num_variables,
        clauses=tuple(clauses),
        instance_id=instance_id,
        name=f"random-{k}sat-n{num_variables}-m{num_clauses}",
    )

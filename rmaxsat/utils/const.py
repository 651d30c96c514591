from typing import Sequence, Union

import numpy as np

ArrayLike = Union[np.ndarray, Sequence]

# assignments are only printed for formulas whose longest clause is at most this long
MAX_PRINTABLE_CLAUSE_LENGTH = 20

# generation gives up after this many attempts at covering both polarities
MAX_GENERATION_ATTEMPTS = 1000

DEFAULT_SEED = 42
DEFAULT_REPETITIONS = 1000

# seconds
RELAXATION_TIMEOUT = 5.0
EXACT_TIMEOUT = 3.0

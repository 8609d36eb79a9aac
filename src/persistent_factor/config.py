"""
Configuration constants for the row factorization.

Adjust these values to change the default behaviour of the algorithms and benchmarks.
"""

# Over-allocation factor for the output matrix and indexing (times the worklist length)
CAPACITY_FACTOR = 1.2

# Default coefficient ring: integers modulo this value
DEFAULT_MODULUS = 2

# Default homology dimension for the benchmark driver
DEFAULT_DIM = 1

# Seed for reproducibility
DEFAULT_SEED = 42

# Print a progress line every this many major keys when verbose
PROGRESS_EVERY = 1000

# Non-invertible dominator policies
NONINVERTIBLE_POLICIES = ("raise", "skip")

# Files expected in a benchmark data directory
DISMAT_FILENAME = "dismat.npy"
PAIRS_FILENAME_TEMPLATE = "pairs_dim{dim}.csv"

"""Default tuning values shared by the estimators, samplers and harness."""

# Integration estimator
NUMERICAL_INTEGRAL_DEFAULT_STEPS = 1000
INTEGRATION_SUBRANGES = 5
INTEGRATION_WIDTH_SDS = 4.0

# Monte Carlo estimator
MONTE_CARLO_DEFAULT_SAMPLE_SIZE = 10_000
DEFAULT_PAIRWISE_METHOD = 'mann_whitney'
NAIVE_PAIRWISE_BLOCK = 1024

# Binomial generator: inversion below this n*p, BTPE above
BTPE_THRESHOLD = 30

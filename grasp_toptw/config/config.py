# Simple parameter defaults (extend freely)
DEFAULTS = {
    "iters": 100,
    "log_period": 10,
    "rcl_size": 3,                  # candidates kept in the restricted list
    "selection": "fuzzy_alpha_cut", # random | fuzzy_best | fuzzy_alpha_cut
    "alpha": 0.8,                   # membership cutoff for the alpha-cut policy
}

# Indices / enums used across modules (keep ints for JIT friendliness)

# node_f columns (float)
NODE_SCORE   = 0
NODE_READY   = 1  # earliest service start
NODE_DUE     = 2  # arrival must be strictly before this
NODE_SERVICE = 3
F_NODE_F     = 4 # 4 features

# depot node id; route k > 0 is anchored at alias id n + k
DEPOT = 0

# RCL selection policies
SEL_RANDOM          = 1
SEL_FUZZY_BEST      = 2
SEL_FUZZY_ALPHA_CUT = 3

SELECTION_POLICIES = {
    "random": SEL_RANDOM,
    "fuzzy_best": SEL_FUZZY_BEST,
    "fuzzy_alpha_cut": SEL_FUZZY_ALPHA_CUT,
}


def parse_selection_policy(value):
    """Map a config name (or an already numeric policy) to its constant."""

    if isinstance(value, str):
        key = value.strip().lower().replace("-", "_")
        if key not in SELECTION_POLICIES:
            raise ValueError(f"unknown selection policy: {value!r}")
        return SELECTION_POLICIES[key]
    policy = int(value)
    if policy not in SELECTION_POLICIES.values():
        raise ValueError(f"unknown selection policy: {value!r}")
    return policy

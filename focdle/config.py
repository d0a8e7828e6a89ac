CONFIG = {
    "random_seed": 123,

    # Game settings
    "min_difficulty": 7,
    "max_difficulty": 15,
    "max_guesses": 50,            # simulator safety cap, not a game rule

    # Frequency oracle
    "oracle_source": None,        # JSON path or http(s) URL; None -> sample secrets
    "oracle_sample_size": 400,    # random secrets per difficulty when sampling
    "oracle_timeout": 10,

    # Chooser
    "jitter": 0.1,
    "search_weight_scale": 5.0,   # weight multiplier when an in-guess tally is given

    # Equality sign fallback position is min(difficulty - 2, equality_cap)
    "equality_cap": 8,

    # Initial guess alphabet gates (by difficulty)
    "modulo_from": 8,
    "all_operators_from": 13,
    "nine_from": 14,

    # Per-difficulty opening templates; '=' slots are kept, the rest refilled
    "initial_templates": {
        7: "1+-*%54",
        8: "1+-*%=54",
        9: "1+-*%==44",
        10: "1+-*%4==15",
        11: "1+-*%4==165",
        12: "1+-*%45=1761",
        13: "1+-3*%5=17611",
        14: "12+-4*%6187111",
        15: "12+-4*%61221111",
    },

    # Logging
    "verbose": False,
}

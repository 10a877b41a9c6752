"""Statistical building blocks: normalization, recent form, efficiency and matchups."""

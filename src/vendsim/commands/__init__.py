"""vendsim CLI subcommands."""

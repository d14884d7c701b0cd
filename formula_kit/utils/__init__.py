"""Runtime utilities shared by the CLI and the harness."""

"""podscope CLI - diagnostics for scope configuration resolution."""

from pageshots.console import debug_console


def verbose_callback(value: bool) -> None:
    """Show readiness and scheduling log messages on stderr."""
    if value:
        debug_console.quiet = False

from rich.console import Console

console = Console()
err_console = Console(stderr=True)
debug_console = Console(stderr=True, quiet=True)

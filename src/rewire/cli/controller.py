# src/rewire/cli/controller.py
# Canvas Controller: user-facing output for the rewire CLI

from rich.console import Console


class Canvas:
    def __init__(self):
        self.console = Console(highlight=False, emoji=False, soft_wrap=True)
        self.err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
        self.prefix_error = "Error"

    def step(self, message: str):
        self.console.print(message, markup=False)

    def success(self, message: str):
        self.console.print(message, markup=False)

    def diagnostic(self, path, error):
        """Non-fatal per-file problem, reported as `<path>: <error>`."""
        self.err_console.print(f"{path}: {error}", markup=False)

    def error(self, message: str, location: str = None):
        prefix = self.prefix_error
        if location:
            prefix = f"{prefix} ({location})"
        self.err_console.print(f"{prefix}: {message}", markup=False)

    def usage(self, text: str):
        self.err_console.print(text, markup=False)


# Instantiate globally for imports
canvas = Canvas()

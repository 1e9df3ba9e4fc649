import sys


def print_to_stderr(output: str, end: str = "\n") -> None:
    """
    Prints output to stderr and flushes

    str output -- a string that is printed to stderr
    str end -- an optional ending, newline by default as Python's print
    """
    sys.stderr.write(f"{output}{end}")
    sys.stderr.flush()


def get_terminal_input(message: str = "") -> str:
    if message:
        sys.stdout.write(message)
        sys.stdout.flush()
    try:
        return input("")
    except EOFError:
        return ""
    except KeyboardInterrupt:
        print("Interrupted")
        sys.exit(1)


def is_run_interactive() -> bool:
    """
    Return True if s2dctl is running in an interactive environment
    """
    return (
        sys.stdin is not None
        and sys.stdout is not None
        and sys.stdin.isatty()
        and sys.stdout.isatty()
    )

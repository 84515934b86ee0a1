import re
import shutil

from promptfy.clipboard import CLIPBOARD_COMMANDS


def check_system_dependencies():
    """Check if a clipboard helper is available for the CLI"""
    found = [cmd[0] for cmd in CLIPBOARD_COMMANDS if shutil.which(cmd[0])]

    if not found:
        names = ", ".join(cmd[0] for cmd in CLIPBOARD_COMMANDS)
        raise RuntimeError(
            f"No clipboard command available (looked for: {names})\n"
            f"Copying from the CLI will fall back to printing the prompt."
        )
    return found


def to_kebab_case(name: str) -> str:
    """problemStatement -> problem-statement"""
    return re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower()

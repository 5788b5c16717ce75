"""Custom styling for questionary prompts.

Shared by every prompt in :mod:`github_secrets.prompts` so the repository
picker, secret entry and confirmations look alike.
"""

from questionary import Style

PROMPT_STYLE = Style(
    [
        ("qmark", "fg:#5fafff bold"),  # Blue question mark
        ("question", "bold"),
        ("answer", "fg:#87d787 bold"),  # Green submitted answer
        ("pointer", "fg:#5fafff bold"),
        ("highlighted", "fg:#5fafff bold"),  # Cursor row in checkbox lists
        ("selected", "fg:#87d787"),  # Checked repositories
        ("separator", "fg:#6c6c6c"),
        ("instruction", "fg:#6c6c6c italic"),
        ("text", ""),
        ("disabled", "fg:#585858 italic"),
    ]
)

POINTER = "❯ "
QMARK = "? "

"""Constants and configuration for the rawedit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Text layout
    TAB_STOP = 8  # Tabs render up to the next multiple of this column

    # Keyboard timing
    READ_TIMEOUT_DECISECONDS = 1  # VTIME: a raw read returns after this long with no input
    MAX_SEQUENCE_LENGTH = 32  # Parameter bytes kept while assembling a CSI sequence
    SIZE_QUERY_ATTEMPTS = 50  # Reads to wait for a cursor position report

    # Screen layout
    STATUS_LINES = 2  # Status bar + message line below the text area
    STATUS_FILENAME_WIDTH = 20  # Max characters of file name shown in the status bar
    UNTITLED_NAME = "[No Name]"
    WELCOME_MESSAGE = "Rawedit editor -- version {}"

    # Status messages
    STATUS_MESSAGE_TTL = 5  # Seconds a status message stays visible
    HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
    QUIT_WARNING_MESSAGE = "File has unsaved changes. Press Ctrl-Q again to quit."
    NO_FILENAME_MESSAGE = "No file name; buffer not saved"
    SAVED_MESSAGE = "{} bytes written to {}"

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files


class AnsiSequences:
    """VT100 control sequences written to the terminal."""

    HIDE_CURSOR = "\x1b[?25l"
    SHOW_CURSOR = "\x1b[?25h"
    CURSOR_HOME = "\x1b[H"
    CURSOR_POSITION = "\x1b[{};{}H"  # 1-based row, column
    CLEAR_SCREEN = "\x1b[2J"
    CLEAR_LINE = "\x1b[K"
    INVERSE = "\x1b[7m"
    RESET_ATTRIBUTES = "\x1b[m"
    NEWLINE = "\r\n"
    # Push the cursor to the bottom-right corner, then ask where it ended up
    QUERY_WINDOW_SIZE = "\x1b[9999C\x1b[9999B\x1b[6n"

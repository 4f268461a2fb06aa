"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, TYPE_CHECKING
from .keyboard import KeyEvent, KeyType

if TYPE_CHECKING:
    from .editor import Editor


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: KeyEvent):
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: KeyEvent):
        self._move(editor)

    @abstractmethod
    def _move(self, editor: 'Editor'):
        """Perform the movement."""
        pass


class MoveLeftCommand(MovementCommand):
    def _move(self, editor):
        editor.view.move_left()


class MoveRightCommand(MovementCommand):
    def _move(self, editor):
        editor.view.move_right()


class MoveUpCommand(MovementCommand):
    def _move(self, editor):
        editor.view.move_up()


class MoveDownCommand(MovementCommand):
    def _move(self, editor):
        editor.view.move_down()


class BeginningOfLineCommand(MovementCommand):
    def _move(self, editor):
        editor.view.move_home()


class EndOfLineCommand(MovementCommand):
    def _move(self, editor):
        editor.view.move_end()


class PageUpCommand(MovementCommand):
    def _move(self, editor):
        editor.view.page_up()


class PageDownCommand(MovementCommand):
    def _move(self, editor):
        editor.view.page_down()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: KeyEvent):
        self._edit(editor, key_event)

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: KeyEvent):
        """Perform the edit."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.delete_char()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        # Forward delete: step over the character, then delete behind the cursor
        editor.view.move_right()
        editor.delete_char()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_newline()


class InsertTabCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_char('\t')


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_char(key_event.char)


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, editor: 'Editor', key_event: KeyEvent):
        self._execute_system(editor)

    @abstractmethod
    def _execute_system(self, editor: 'Editor'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    def _execute_system(self, editor):
        editor.request_quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor):
        editor.save()


class NoOpCommand(SystemCommand):
    """Consumes a key without doing anything (reserved keys)."""

    def _execute_system(self, editor):
        pass


BACKSPACE = 0x7f


class CommandRegistry:
    """Registry mapping decoded key events to commands."""

    def __init__(self):
        self._commands: Dict[KeyEvent, EditorCommand] = {}
        self._insert_text = InsertTextCommand()
        self._ignore = NoOpCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands, arrows and their Emacs letter aliases
        self.register(KeyEvent(KeyType.UP), MoveUpCommand())
        self.register(KeyEvent(KeyType.DOWN), MoveDownCommand())
        self.register(KeyEvent(KeyType.LEFT), MoveLeftCommand())
        self.register(KeyEvent(KeyType.RIGHT), MoveRightCommand())
        self.register(KeyEvent.ctrl('p'), MoveUpCommand())
        self.register(KeyEvent.ctrl('n'), MoveDownCommand())
        self.register(KeyEvent.ctrl('b'), MoveLeftCommand())
        self.register(KeyEvent.ctrl('f'), MoveRightCommand())

        # Line movement
        self.register(KeyEvent(KeyType.HOME), BeginningOfLineCommand())
        self.register(KeyEvent.ctrl('a'), BeginningOfLineCommand())
        self.register(KeyEvent(KeyType.END), EndOfLineCommand())
        self.register(KeyEvent.ctrl('e'), EndOfLineCommand())

        # Paging
        self.register(KeyEvent(KeyType.PAGE_UP), PageUpCommand())
        self.register(KeyEvent(KeyType.PAGE_DOWN), PageDownCommand())

        # Editing commands
        self.register(KeyEvent(KeyType.DELETE), DeleteCharCommand())
        self.register(KeyEvent.ctrl('d'), DeleteCharCommand())
        self.register(KeyEvent.key(BACKSPACE), BackspaceCommand())
        self.register(KeyEvent.ctrl('h'), BackspaceCommand())
        self.register(KeyEvent.ctrl('m'), InsertNewlineCommand())
        self.register(KeyEvent.ctrl('i'), InsertTabCommand())

        # System commands
        self.register(KeyEvent.ctrl('q'), QuitCommand())
        self.register(KeyEvent.ctrl('s'), SaveCommand())

        # Reserved
        self.register(KeyEvent.key(0x1b), NoOpCommand())
        self.register(KeyEvent.ctrl('l'), NoOpCommand())

    def register(self, key: KeyEvent, command: EditorCommand):
        """Register a command for a key event."""
        self._commands[key] = command

    def get_command(self, key_event: KeyEvent) -> Optional[EditorCommand]:
        """Get the command for a key event.

        Plain bytes without a binding insert themselves, unbound control keys
        are consumed without effect, and events that are not keystrokes
        (unidentified sequences, cursor reports) have no command at all.
        """
        command = self._commands.get(key_event)
        if command is not None:
            return command
        if key_event.key_type != KeyType.KEY:
            return None
        if key_event.is_ctrl:
            return self._ignore
        return self._insert_text

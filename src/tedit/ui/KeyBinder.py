# tedit/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
The KeyBinder class translates raw terminal input into abstract key events and
dispatches them to the editor commands of `Tedit`.

Key Features:
- Reads one key (or a whole ESC sequence) from curses with `get_wch`, so
  non-ASCII characters arrive as single `str` values.
- Decodes CSI/SS3 escape sequences that curses did not translate itself.
- Loads the save and quit bindings from the ``[keybindings]`` config section
  (``"ctrl+s"``, ``"ctrl+c|ctrl+q"``, lists, or raw integer codes).
- Maps every input to a `KeyEvent`; anything unrecognised becomes
  ``Key.UNKNOWN`` and is dropped by the dispatcher.

Intended Usage:
---------------
Instantiate KeyBinder with a reference to the editor. Call `get_key_input` to
block for the next raw key and `handle_input` to decode and dispatch it.
"""

import curses
import enum
import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from tedit.utils.logging_config import KEY_LOGGER

if TYPE_CHECKING:
    from tedit.core.Tedit import Tedit


# Raw codes below this value are characters; curses function keys start above it.
CHAR_CODE_LIMIT = 256


class Key(enum.Enum):
    """Abstract key identities understood by the editor core."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    BACKSPACE = "backspace"
    DELETE = "delete"
    CHAR = "char"
    SAVE = "save"
    QUIT = "quit"
    RESIZE = "resize"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """A decoded key press. ``char`` is set only for ``Key.CHAR``."""

    key: Key
    char: Optional[str] = None


# Config action name -> abstract key.
ACTION_KEYS: dict[str, Key] = {
    "save_file": Key.SAVE,
    "quit": Key.QUIT,
}


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Class KeyBinder
    ====================
    Decodes terminal input into `KeyEvent`s and routes them to editor actions.

    Attributes:
        editor (Tedit): The editor whose commands are invoked.
        config (dict): Editor configuration (``[keybindings]`` is consulted).
        stdscr (curses.window): Window used for reading input.
        keybindings (dict[str, list[int]]): Action name -> bound key codes.
        code_map (dict[int, Key]): Key code -> abstract key, bindings included.
        handlers (dict[Key, Callable]): Abstract key -> editor command.
    """

    # Normalized escape sequences. Keys do NOT include the leading ESC (0x1B),
    # because get_key_input() already consumed it.
    ESCAPE_SEQUENCE_MAP: dict[str, str] = {
        # Arrows (CSI and SS3)
        "[A": "up", "[B": "down", "[C": "right", "[D": "left",
        "OA": "up", "OB": "down", "OC": "right", "OD": "left",
        # Delete (~ style)
        "[3~": "delete",
    }

    def __init__(self, editor: "Tedit") -> None:
        logging.debug("KeyBinder initialized with editor: %s", editor)
        self.editor = editor
        self.config = editor.config
        self.stdscr = editor.stdscr

        self.keybindings = self._load_keybindings()
        self.code_map = self._setup_code_map()
        self.handlers = self._setup_handlers()

    # ---------------------- Bindings --------------------
    def _load_keybindings(self) -> dict[str, list[int]]:
        """Parse the configurable bindings into lists of key codes.

        Each action accepts a list, a ``|``-separated string, a single key
        string or a raw integer. Unparseable entries are logged and skipped.
        """
        default_keybindings: dict[str, Any] = {
            "save_file": ["ctrl+s"],
            "quit": ["ctrl+c", "ctrl+q"],
        }
        user_keybindings: dict[str, Any] = self.config.get("keybindings", {})
        parsed: dict[str, list[int]] = {}

        for action, default_spec in default_keybindings.items():
            spec = user_keybindings.get(action, default_spec)
            if not spec and spec != 0:
                logging.debug("Keybinding for action %r is disabled or empty.", action)
                continue

            if isinstance(spec, list):
                items = spec
            elif isinstance(spec, str) and "|" in spec:
                items = [s.strip() for s in spec.split("|")]
            else:
                items = [spec]

            codes: list[int] = []
            for item in items:
                try:
                    code = self._decode_keystring(item)
                except ValueError as e:
                    logging.error(
                        "Error parsing keybinding item %r for action %r: %s. "
                        "This specific binding for the action will be ignored.",
                        item, action, e,
                    )
                    continue
                if code not in codes:
                    codes.append(code)

            if codes:
                parsed[action] = codes
            else:
                logging.warning(
                    "No valid key codes found for action %r after parsing. It will not be bound.",
                    action,
                )

        logging.debug("Loaded keybindings (action -> key codes): %s", parsed)
        return parsed

    def _decode_keystring(self, key_input: str | int) -> int:
        """Decode a key specification such as ``"ctrl+s"`` or ``"delete"``.

        Raises:
            ValueError: For unknown key names or modifiers.
        """
        if isinstance(key_input, int):
            return key_input
        if not isinstance(key_input, str):
            raise ValueError(f"Unsupported key specification type: {type(key_input).__name__}")

        s = key_input.strip().lower()
        if not s:
            raise ValueError("Empty key specification")

        named_keys_map: dict[str, int] = {
            "up": curses.KEY_UP,
            "down": curses.KEY_DOWN,
            "left": curses.KEY_LEFT,
            "right": curses.KEY_RIGHT,
            "delete": curses.KEY_DC,
            "del": curses.KEY_DC,
            "backspace": curses.KEY_BACKSPACE,
            "enter": 10,
            "return": 10,
            "esc": 27,
            "escape": 27,
        }
        named_keys_map.update(
            {f"f{i}": getattr(curses, f"KEY_F{i}", 264 + i) for i in range(1, 13)}
        )

        if s in named_keys_map:
            return named_keys_map[s]

        parts = s.split("+")
        base = parts[-1].strip()
        modifiers = {p.strip() for p in parts[:-1]}

        if modifiers - {"ctrl"}:
            raise ValueError(f"Unknown or unhandled modifiers {sorted(modifiers - {'ctrl'})} in '{key_input}'")
        if len(base) != 1:
            raise ValueError(f"Unknown base key '{base}' in '{key_input}'")

        if "ctrl" in modifiers:
            if "a" <= base <= "z":
                return ord(base) - ord("a") + 1
            ctrl_symbols = {"[": 27, "\\": 28, "]": 29, "/": 31}
            if base in ctrl_symbols:
                return ctrl_symbols[base]
            raise ValueError(f"Ctrl combination not representable: '{key_input}'")
        return ord(base)

    def _setup_code_map(self) -> dict[int, Key]:
        """Build the key-code lookup: built-in keys first, then bindings."""
        code_map: dict[int, Key] = {
            curses.KEY_UP: Key.UP,
            curses.KEY_DOWN: Key.DOWN,
            curses.KEY_LEFT: Key.LEFT,
            curses.KEY_RIGHT: Key.RIGHT,
            curses.KEY_BACKSPACE: Key.BACKSPACE,
            8: Key.BACKSPACE,  # BS
            127: Key.BACKSPACE,  # DEL as sent by most terminals
            curses.KEY_DC: Key.DELETE,
            curses.KEY_RESIZE: Key.RESIZE,
        }
        for action, codes in self.keybindings.items():
            key = ACTION_KEYS[action]
            for code in codes:
                if code in code_map and code_map[code] is not key:
                    logging.warning(
                        "Keybinding for action '%s' (key: %s) is overwriting %s.",
                        action, code, code_map[code].name,
                    )
                code_map[code] = key
        return code_map

    def _setup_handlers(self) -> dict[Key, Callable[[], bool]]:
        return {
            Key.UP: self.editor.handle_up,
            Key.DOWN: self.editor.handle_down,
            Key.LEFT: self.editor.handle_left,
            Key.RIGHT: self.editor.handle_right,
            Key.BACKSPACE: self.editor.handle_backspace,
            Key.DELETE: self.editor.handle_delete,
            Key.SAVE: self.editor.save_file,
            Key.QUIT: self.editor.exit_editor,
            Key.RESIZE: self.editor.handle_resize,
        }

    # ---------------------- Decoding --------------------
    def decode(self, raw: str | int) -> KeyEvent:
        """Translate one raw input value into a `KeyEvent`.

        ``str`` values are characters (from `get_wch`); ``int`` values are
        curses key codes or, below 256, character codes.
        """
        if isinstance(raw, str):
            if len(raw) != 1:
                return KeyEvent(Key.UNKNOWN)
            code: Optional[int] = ord(raw) if ord(raw) < CHAR_CODE_LIMIT else None
            char = raw
        elif isinstance(raw, int):
            if raw < 0:
                return KeyEvent(Key.UNKNOWN)
            code = raw
            char = chr(raw) if raw < CHAR_CODE_LIMIT else None
        else:
            return KeyEvent(Key.UNKNOWN)

        if code is not None and code in self.code_map:
            return KeyEvent(self.code_map[code])

        if char in ("\n", "\r") or code == curses.KEY_ENTER:
            return KeyEvent(Key.CHAR, "\n")
        if char is None:
            return KeyEvent(Key.UNKNOWN)
        if unicodedata.category(char) == "Cc":
            return KeyEvent(Key.UNKNOWN)
        return KeyEvent(Key.CHAR, char)

    # ---------------------- Handle Input --------------------
    def handle_input(self, raw: str | int) -> bool:
        """Decode *raw* and run the matching editor command.

        Returns:
            bool: True if the command reported a visible change.
        """
        event = self.decode(raw)
        KEY_LOGGER.debug("raw=%r -> %s %r", raw, event.key.name, event.char)

        if event.key is Key.UNKNOWN:
            logging.debug("handle_input: dropping unrecognised input %r", raw)
            return False

        if event.key is not Key.RESIZE:
            self.editor.clear_status_message()

        if event.key is Key.CHAR:
            if event.char is None:
                return False
            return self.editor.insert_char(event.char)
        return self.handlers[event.key]()

    def get_key_input(self, window: Optional["curses.window"] = None) -> str | int:
        """Block for one key and return it, resolving ESC sequences.

        Returns:
            str | int:
            - a one-character ``str`` for ordinary characters,
            - a curses key code (int) for keys curses decoded, or for an
              escape sequence found in `ESCAPE_SEQUENCE_MAP`,
            - 27 for a lone ESC or an unknown sequence,
            - ``curses.ERR`` when the read failed.
        """
        target = window or self.stdscr

        try:
            ch = target.get_wch()
        except curses.error:
            return curses.ERR
        if ch != "\x1b" and ch != 27:
            return ch

        # ESC received: lone ESC or an escape sequence
        seq = ""
        target.nodelay(True)
        try:
            while True:
                try:
                    nx = target.get_wch()
                except curses.error:
                    break
                seq += nx if isinstance(nx, str) else f"<{nx}>"
        finally:
            target.nodelay(False)

        if not seq:
            return 27

        mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if not mapped:
            cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
            mapped = self.ESCAPE_SEQUENCE_MAP.get(cleaned)

        if mapped:
            code = self._decode_keystring(mapped)
            logging.debug("get_key_input: ESC %r -> %r -> code %r", seq, mapped, code)
            return code

        logging.warning("get_key_input: unknown escape sequence: ESC + %r", seq)
        return 27

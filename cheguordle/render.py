import logging
import os
import subprocess
from html import escape
from pathlib import Path
from typing import Optional, List, TYPE_CHECKING

from .game import ALPHABET, Classification

# only needed for type hints, game.py never imports this module
if TYPE_CHECKING:
    from .game import Board

logger = logging.getLogger(__name__)

# --- Constants and Paths ---
ASSETS_DIR = Path(__file__).parent / 'assets'
TEMPLATE_PATH = ASSETS_DIR / 'template.html'
CSS_PATH = ASSETS_DIR / 'styles.css'
SCREENSHOTS_DIR = Path('screenshots')

# spanish keyboard layout, Ñ sits where the semicolon is on a US layout
KEYBOARD_ROWS = ("QWERTYUIOP", "ASDFGHJKLÑ", "ZXCVBNM")


# --- Text-based UI Class ---
class TextUI:
    def __init__(self):
        self.feedback_char_map = {
            Classification.EXACT: "G",
            Classification.PRESENT: "Y",
            Classification.ABSENT: "X",
        }

    def get_text_observation(self, board: 'Board', status: Optional[str] = None) -> str:
        board_str = self._get_board_string(board)
        letters_str = self._get_letters_string(board)

        status_message = f"{status}\n\n" if status else ""
        return f"{status_message}{board_str}\n{letters_str}"

    def _get_board_string(self, board: 'Board') -> str:
        width = board.WORD_LENGTH
        lines = ["=" * (width + 2)]
        for i in range(board.MAX_GUESSES):
            word = board.row(i)
            feedback = board.classifications(i)
            if feedback is not None:
                feedback_chars = "".join(self.feedback_char_map[f] for f in feedback)
                lines.append(f"|{word}|")
                lines.append(f"|{feedback_chars}|")
            elif i == board.current and not board.is_over:
                # the row being typed, no feedback yet
                lines.append(f"|{word.ljust(width, '_')}|")
                lines.append(f"|{' ' * width}|")
            else:
                lines.append(f"|{' ' * width}|")
                lines.append(f"|{' ' * width}|")

            if i < board.MAX_GUESSES - 1:
                lines.append("-" * (width + 2))
        lines.append("=" * (width + 2))
        return "\n".join(lines)

    def _get_letters_string(self, board: 'Board') -> str:
        letter_states = board.letter_states()

        def pick(state):
            return [k for k in ALPHABET if letter_states[k] is state]

        lines = ["\nLetras:"]
        lines.append(f"  Correctas: {' '.join(pick(Classification.EXACT))}")
        lines.append(f"  Presentes: {' '.join(pick(Classification.PRESENT))}")
        lines.append(f"  Ausentes:  {' '.join(pick(Classification.ABSENT))}")
        lines.append(f"  Sin usar:  {' '.join(pick(None))}")
        return "\n".join(lines)


# --- Screenshot and HTML generation ---
def generate_html(board: 'Board', status: Optional[str] = None) -> str:
    letter_states = board.letter_states()

    message_html = ''
    if status:
        message_html = f'<div class="status-message">{escape(status)}</div>'

    grid_html = ''
    for row in board.tiles():
        grid_html += '<div class="row">'
        for tile in row:
            classes = ['tile']
            if tile.classification is not None:
                classes.append(tile.classification.value)
            if tile.letter:
                classes.append('filled')
            grid_html += f'<div class="{" ".join(classes)}">{escape(tile.letter)}</div>'
        grid_html += '</div>'

    keyboard_html = ''
    for row in KEYBOARD_ROWS:
        keyboard_html += '<div class="keyboard-row">'
        if 'Z' in row: keyboard_html += '<button class="key wide">Enviar</button>'
        for key in row:
            state = letter_states.get(key)
            cls = state.value if state is not None else ''
            keyboard_html += f'<button class="key {cls}">{escape(key)}</button>'
        if 'M' in row: keyboard_html += '<button class="key wide">&#9003;</button>'
        keyboard_html += '</div>'

    with open(TEMPLATE_PATH, 'r', encoding='utf-8') as f: html_template = f.read()
    return html_template.format(grid_html=grid_html, keyboard_html=keyboard_html, message_html=message_html)


def render_board_screenshot(
    board: 'Board',
    status: Optional[str] = None,
    output_path: Optional[Path] = None
) -> Optional[bytes]:
    """
    Renders the board as a PNG and returns its bytes.
    If output_path is provided, it saves the image to that path as a side effect.
    """
    try:
        from html2image import Html2Image
    except ImportError:
        logger.error("html2image is not installed. To export screenshots, run: 'pip install html2image'")
        return None

    html = generate_html(board, status)
    with open(CSS_PATH, 'r', encoding='utf-8') as f:
        css = f.read()

    temp_dir = SCREENSHOTS_DIR / ".temp"
    os.makedirs(temp_dir, exist_ok=True)

    try:
        hti = Html2Image(custom_flags=['--disable-gpu', '--no-sandbox', '--headless=new', '--log-level=3'], output_path=str(temp_dir))
        temp_files: List[str] = hti.screenshot(html_str=html, css_str=css, size=(500, 760))
    except (OSError, subprocess.SubprocessError) as e:
        # html2image needs a chrome/chromium install to drive
        logger.error("Could not take a screenshot: %s", e)
        return None
    if not temp_files:
        logger.error("html2image produced no screenshot")
        return None

    temp_file_path = Path(temp_files[0])
    try:
        with open(temp_file_path, 'rb') as f:
            image_bytes = f.read()
    except OSError as e:
        logger.error("html2image produced no screenshot: %s", e)
        return None

    if output_path:
        os.makedirs(output_path.parent, exist_ok=True)
        temp_file_path.replace(output_path)
    else:
        os.remove(temp_file_path)

    return image_bytes

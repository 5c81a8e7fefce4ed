#!/usr/bin/env python3
"""
Name: morse
Description: translate text to Morse code and Morse code back to text
Author: Python Power Tools contributors
License: artistic2
"""

import sys
import os
import argparse
import re
from enum import Enum

__version__ = "1.0"

# --- Morse Code Table ---
# The single source of truth; both lookup maps are derived from it.
CODE_TABLE = (
    ('A', '.-'), ('B', '-...'), ('C', '-.-.'), ('D', '-..'), ('E', '.'),
    ('F', '..-.'), ('G', '--.'), ('H', '....'), ('I', '..'), ('J', '.---'),
    ('K', '-.-'), ('L', '.-..'), ('M', '--'), ('N', '-.'), ('O', '---'),
    ('P', '.--.'), ('Q', '--.-'), ('R', '.-.'), ('S', '...'), ('T', '-'),
    ('U', '..-'), ('V', '...-'), ('W', '.--'), ('X', '-..-'), ('Y', '-.--'),
    ('Z', '--..'),
    ('0', '-----'), ('1', '.----'), ('2', '..---'), ('3', '...--'), ('4', '....-'),
    ('5', '.....'), ('6', '-....'), ('7', '--...'), ('8', '---..'), ('9', '----.'),
)
CHAR_TO_MORSE = dict(CODE_TABLE)
MORSE_TO_CHAR = {code: char for char, code in CODE_TABLE}

DEFAULT_SENTENCE_DELIM = '/'
DEFAULT_WORD_BOUNDARY = '\\'
DEFAULT_UNKNOWN = '?'

# ASCII record separator; stands in for sentence punctuation while the
# rest of the punctuation is stripped.
SENTINEL = '\x1e'

ALNUM_RE = re.compile(r'[A-Za-z0-9]')
SENTENCE_END_RE = re.compile(r'[.!?]+')
STRIP_RE = re.compile(r'[^A-Za-z0-9 ' + SENTINEL + r']')
SPACES_RE = re.compile(r' +')
MORSE_TOKEN_RE = re.compile(r'[.-]+')

# Tab, carriage return, form feed and vertical tab all fold to a space.
WHITESPACE_TO_SPACE = str.maketrans('\t\r\f\v', '    ')


class Direction(Enum):
    ENCODE = 0
    DECODE = 1


class Config:
    """The three user-settable tokens. No validation is done on any of them."""
    def __init__(self, sentence_delim=DEFAULT_SENTENCE_DELIM,
                 word_boundary=DEFAULT_WORD_BOUNDARY, unknown=DEFAULT_UNKNOWN):
        self.sentence_delim = sentence_delim
        self.word_boundary = word_boundary
        self.unknown = unknown

    def special_tokens(self):
        """
        Returns the delimiter tokens in match priority order. The sentence
        delimiter always comes first so that it wins when one delimiter is
        a prefix of the other. Empty delimiters are left out since they
        would match everywhere.
        """
        return [tok for tok in (self.sentence_delim, self.word_boundary) if tok]


# --- Core Translation Functions ---

def normalize(raw: str) -> str:
    """Drops newlines, turns other whitespace into spaces and squeezes runs of spaces."""
    text = raw.replace('\n', '')
    text = text.translate(WHITESPACE_TO_SPACE)
    return SPACES_RE.sub(' ', text)


def detect(text: str) -> Direction:
    """Any ASCII letter or digit means the input is plain text."""
    if ALNUM_RE.search(text):
        return Direction.ENCODE
    return Direction.DECODE


def lookup_char(char: str):
    """Returns the Morse code for a symbol, or None if the symbol has no code."""
    return CHAR_TO_MORSE.get(char)


def lookup_code(token: str):
    """Returns the symbol for a dot/dash token, or None if nothing maps to it."""
    return MORSE_TO_CHAR.get(token)


def match_special_at(text: str, pos: int, config: Config):
    """Returns the delimiter token that starts at text[pos], or None."""
    for tok in config.special_tokens():
        if text.startswith(tok, pos):
            return tok
    return None


def match_special_token(token: str, config: Config):
    """Returns True if the whole token is one of the delimiters."""
    return token in config.special_tokens()


def prepare_text(text: str, config: Config) -> str:
    """
    Reduces plain text to what the encoder understands: uppercase letters,
    digits, single spaces and the sentence delimiter.
    """
    # Sentence punctuation is parked on a sentinel first so that stripping
    # the remaining punctuation cannot touch it.
    text = SENTENCE_END_RE.sub(SENTINEL, text)
    text = STRIP_RE.sub('', text)
    text = SPACES_RE.sub(' ', text)
    text = text.upper()
    return text.replace(SENTINEL, config.sentence_delim)


def encode(text: str, config: Config = None) -> str:
    """Encodes normalized text into space separated Morse tokens."""
    if config is None:
        config = Config()
    text = prepare_text(text, config)

    tokens = []
    pos = 0
    while pos < len(text):
        special = match_special_at(text, pos, config)
        if special is not None:
            tokens.append(special)
            pos += len(special)
            continue

        char = text[pos]
        if char == ' ':
            tokens.append(config.word_boundary)
        else:
            code = lookup_char(char)
            if code is not None:
                tokens.append(code)
            # Anything else is dropped.
        pos += 1

    return join_tokens(tokens)


def join_tokens(tokens) -> str:
    """
    Joins tokens with single spaces. A token that already ends (or the
    next one that already starts) with a space does not get another one,
    so the output never holds two separator spaces in a row.
    """
    out = []
    for tok in tokens:
        if not tok:
            continue
        if out and not out[-1].endswith(' ') and not tok.startswith(' '):
            out.append(' ')
        out.append(tok)
    return ''.join(out)


def decode(text: str, config: Config = None) -> str:
    """Decodes space separated Morse tokens back into text."""
    if config is None:
        config = Config()

    output = []
    for token in text.split(' '):
        if not token:
            continue
        # Delimiters are checked before the code table, so a delimiter
        # that is also a dot/dash pattern still reads as a space.
        if match_special_token(token, config):
            output.append(' ')
        elif MORSE_TOKEN_RE.fullmatch(token):
            char = lookup_code(token)
            output.append(config.unknown if char is None else char)
        else:
            output.append(config.unknown)
    return "".join(output)


def translate(raw: str, config: Config = None) -> str:
    """Normalizes the input and runs it through the encoder or the decoder."""
    text = normalize(raw)
    if detect(text) is Direction.ENCODE:
        return encode(text, config)
    return decode(text, config)


# --- Command Line ---

EPILOG = r"""
Cleanup (always done first):
  1) Strip all newlines
  2) Replace non-space whitespace (tabs, CR, etc.) with a single space
  3) Collapse multiple spaces into one

Auto-detection:
  If the cleaned input contains any letters or digits it is treated as
  English, otherwise as Morse.

English path:
  . ! ? (one or more) become the sentence delimiter, other punctuation is
  dropped, letters and digits become Morse, spaces become the word boundary.

Morse path:
  Tokens are split on spaces. The word boundary and the sentence delimiter
  become spaces. Unknown tokens become the --unknown text.

Examples:
  %(prog)s "Hello, world!"
  echo "Hello, world!  How are you?" | %(prog)s
  %(prog)s ".... . .-.. .-.. --- / .-- --- .-. .-.. -.."
  %(prog)s "End. New sentence!" --sentence-delim=//

A delimiter that starts with '-' must be given as --option=VALUE.
"""


def build_parser():
    parser = argparse.ArgumentParser(
        prog='morse',
        description="Translate text to Morse code, or Morse code to text.",
        usage="%(prog)s [TEXT ...] [--sentence-delim=/] [--word-boundary=\\] [--unknown=?]",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--sentence-delim', default=DEFAULT_SENTENCE_DELIM,
                        metavar='TOKEN',
                        help="token for sentence boundaries (default: %(default)s)")
    parser.add_argument('--word-boundary', default=DEFAULT_WORD_BOUNDARY,
                        metavar='TOKEN',
                        help="token for word boundaries (default: %(default)s)")
    parser.add_argument('--unknown', default=DEFAULT_UNKNOWN,
                        metavar='TOKEN',
                        help="text for unknown Morse tokens (default: %(default)s)")
    parser.add_argument('-V', '--version', action='version',
                        version=f'%(prog)s {__version__}')
    parser.add_argument('text', nargs='*',
                        help="Text to translate. Reads from stdin if not given.")
    return parser


def main(argv=None):
    """Parses arguments, reads the input and prints the translation."""
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args, extras = parser.parse_known_args(argv)
    program_name = os.path.basename(sys.argv[0]) or parser.prog

    # A Morse word such as "-.--" looks like an option to argparse, and
    # words after an option can be left over too. Both are part of TEXT.
    for extra in extras:
        if extra.startswith('-') and not MORSE_TOKEN_RE.fullmatch(extra):
            parser.error(f"unrecognized arguments: {extra}")

    # Put the words back in command line order.
    pending = list(args.text or []) + extras
    words = []
    for arg in argv:
        if arg in pending:
            pending.remove(arg)
            words.append(arg)

    config = Config(args.sentence_delim, args.word_boundary, args.unknown)

    input_text = " ".join(words)
    if not input_text:
        try:
            # Bytes that are not valid UTF-8 become U+FFFD, which the
            # encoder drops and the decoder reports as unknown.
            input_text = sys.stdin.buffer.read().decode('utf-8', errors='replace')
        except IOError as e:
            print(f"{program_name}: cannot read input: {e}", file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            return 1

    print(translate(input_text, config))
    return 0


if __name__ == "__main__":
    sys.exit(main())

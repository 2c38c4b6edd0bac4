"""Line-oriented prompting on a text console."""

import math
import sys

ANSWER_ERROR = "    ERROR: ANSWER WAS NOT Y OR N!\n\n"
COMMAND_ERROR = "    ERROR: COMMAND OUT OF RANGE RETRY!\n\n"
INTEGER_ERROR = "    ERROR: ENTER A WHOLE NUMBER!\n\n"
NUMBER_ERROR = "    ERROR: ENTER A NUMBER!\n\n"


class Console:
    """Reads answers from one text stream and writes prompts to another.

    The streams default to the process's standard input and output.
    Reading past the end of input raises EOFError.
    """

    def __init__(self, stdin=None, stdout=None):
        self._stdin = stdin
        self._stdout = stdout

    @property
    def _input(self):
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def _output(self):
        return self._stdout if self._stdout is not None else sys.stdout

    def write(self, text):
        self._output.write(text)
        self._output.flush()

    def read_line(self, prompt=""):
        """Show a prompt and return the next line without its line ending."""
        if prompt:
            self.write(prompt)
        line = self._input.readline()
        if not line:
            raise EOFError("no more input")
        return line.rstrip("\r\n")

    def read_int(self, prompt=""):
        """Prompt until a whole number is entered and return it."""
        while True:
            text = self.read_line(prompt).strip()
            try:
                return int(text)
            except ValueError:
                self.write(INTEGER_ERROR)

    def read_float(self, prompt=""):
        """Prompt until a finite number is entered and return it."""
        while True:
            text = self.read_line(prompt).strip()
            try:
                value = float(text)
            except ValueError:
                value = math.nan
            if math.isfinite(value):
                return value
            self.write(NUMBER_ERROR)

    def confirm(self, prompt):
        """Ask a Y/N question until it gets Y or N; return True for Y."""
        while True:
            answer = self.read_line(prompt).strip()[:1]
            if answer == "Y":
                return True
            if answer == "N":
                return False
            self.write(ANSWER_ERROR)

    def enter_command(self, low, high):
        """Prompt for a command number until it lies within low..high."""
        while True:
            command = self.read_int("    ENTER COMMAND: ")
            self.write("\n")
            if low <= command <= high:
                return command
            self.write(COMMAND_ERROR)

    def enter_id(self, prompt, count, error):
        """Prompt for an id from 1 to count, writing the error text for any other."""
        if count < 1:
            raise ValueError("nothing to choose from")
        while True:
            item_id = self.read_int(prompt)
            self.write("\n")
            if 1 <= item_id <= count:
                return item_id
            self.write(f"    ERROR: {error}\n\n")
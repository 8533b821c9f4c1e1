import argparse
import sys

from ..BIT.FenwickTree import FenwickTree
from ..CSV.loader import IngestError, load_csv_batch
from ..utils import local_window, merge_settings

MENU = """
Fenwick Tree Demo (Binary Indexed Tree)
#################################
1) add <index> <delta>                      (point update + show update path)
2) prefix <index>                           (prefix sum + show summation path)
3) range <leftIndex> <rightIndex>           (range sum)
4) reset                                    (zeroes out all data)
5) size                                     (print maximum index)
6) load CSV                                 (load csv file from data folder)
0) exit                                     (exit the program)
#################################"""

PROMPT = "\nEnter command (0=exit, 1=add, 2=prefix, 3=range, 4=reset, 5=size, 6=load csv): "

USAGE = {
    1: "Choice: 1 <index> <delta>",
    2: "Choice: 2 <index>",
    3: "Choice: 3 <leftIndex> <rightIndex>",
}


class TokenReader:
    """
    Reads whitespace separated tokens from a text stream, one line at a time,
    so arguments may follow a command on the same line or on later ones.
    """

    def __init__(self, stream):
        self._stream = stream
        self._tokens = []

    def next_token(self):
        """Returns the next token. Raises EOFError once the stream is exhausted."""
        while len(self._tokens) == 0:
            line = self._stream.readline()
            if line == '':
                raise EOFError()
            self._tokens = line.split()
        return self._tokens.pop(0)

    def next_int(self):
        """
        Returns the next token as an int. A token that is not an integer is
        left unconsumed and ValueError is raised.
        """
        token = self.next_token()
        try:
            return int(token)
        except ValueError:
            self._tokens.insert(0, token)
            raise

    def discard_line(self):
        self._tokens = []


class CommandLoop:
    """
    Drives one FenwickTree from numeric commands.

    Parameters
    ----------
    fenwick : FenwickTree
        The tree every command acts on.
    settings : dict, optional
        See utils.DEFAULT_SETTINGS.
    stdin, stdout : text streams, optional
        Default to sys.stdin and sys.stdout.
    """

    def __init__(self, fenwick, settings=None, stdin=None, stdout=None):
        self.fenwick = fenwick
        self.settings = merge_settings(settings)
        self.reader = TokenReader(stdin if stdin is not None else sys.stdin)
        self.out = stdout if stdout is not None else sys.stdout
        self.handlers = {
            1: self.cmd_add,
            2: self.cmd_prefix,
            3: self.cmd_range,
            4: self.cmd_reset,
            5: self.cmd_size,
            6: self.cmd_load,
        }

    def write(self, *args, **kwargs):
        print(*args, file=self.out, **kwargs)

    def print_menu(self):
        self.write(MENU)

    def show_local_window(self, center):
        window = local_window(self.fenwick, center, self.settings['window_halfwidth'])
        if len(window) == 0:
            return
        self.write(f"Local buckets [{window[0][0]}..{window[-1][0]}]:")
        for i, value in window:
            self.write(f" {i}: {value}")

    def show_path(self, label, path):
        ranges = [self.fenwick.covered_range(i) for i in path]
        steps = " -> ".join(f"{i}[{lo}..{hi}]" for i, (lo, hi) in zip(path, ranges))
        self.write(f"{label}: {steps}")

    def run(self):
        self.print_menu()
        while True:
            self.write(PROMPT, end='')
            try:
                cmd = self.reader.next_int()
            except (ValueError, EOFError):
                self.write("Input is invalid. Ending the program.")
                break
            if cmd == 0:
                self.write("Till the next time!")
                break
            handler = self.handlers.get(cmd)
            if handler is None:
                self.write("You have entered an unknown command, please try again.")
                self.print_menu()
                continue
            try:
                handler()
            except (ValueError, EOFError):
                if cmd not in USAGE:
                    raise
                self.write(USAGE[cmd])
                self.reader.discard_line()

    def cmd_add(self):
        idx = self.reader.next_int()
        delta = self.reader.next_int()
        n = self.fenwick.size()
        if idx < 1 or idx > n:
            self.write(f"The index is out of range. Valid choices are 1 through {n}")
            return
        path = self.fenwick.update_path(idx)
        try:
            self.fenwick.add(idx, delta)
        except OverflowError:
            self.write(f"The delta {delta} does not fit in a 64-bit accumulator.")
            return
        self.write(f"Added {delta} at index {idx}.")
        self.show_path("Update path", path)
        self.write(f"prefix({idx}) = {self.fenwick.prefix_sum(idx)}")
        self.show_local_window(idx)

    def cmd_prefix(self):
        idx = self.reader.next_int()
        self.write(f"prefix({idx}) = {self.fenwick.prefix_sum(idx)}")
        path = self.fenwick.query_path(idx)
        if len(path) > 0:
            self.show_path("Summation path", path)
        center = min(max(idx, 1), self.fenwick.size())
        self.show_local_window(center)

    def cmd_range(self):
        left = self.reader.next_int()
        right = self.reader.next_int()
        self.write(f"range_sum({left}..{right}) = {self.fenwick.range_sum(left, right)}")

    def cmd_reset(self):
        self.fenwick.reset()
        self.write("The tree has been reset.")

    def cmd_size(self):
        self.write(f"Max index (size) = {self.fenwick.size()}")

    def cmd_load(self):
        path = self.settings['csv_path']
        try:
            report = load_csv_batch(path, self.fenwick, self.settings)
        except (IngestError, ValueError) as e:
            self.write(str(e))
            return
        self.write(report.summary(path))


def delimiter(value):
    if value == "":
        raise argparse.ArgumentTypeError("delimiter must not be empty")
    return value


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Interactive Fenwick tree over bucketed trade volumes.")
    parser.add_argument("--size", "-n", type=int, help="maximum index; prompted for when omitted")
    parser.add_argument("--csv", dest="csv_path", help="CSV file loaded by command 6")
    parser.add_argument("--delimiter", type=delimiter, help="CSV field separator")
    parser.add_argument("--window", dest="window_halfwidth", type=int, help="half width of the local bucket window")
    parser.add_argument("--progress", dest="show_progress", action="store_true", default=None)
    parser.add_argument("--verbose", "-v", action="store_true", default=None)
    return parser.parse_args(argv)


def main(argv=None, stdin=None, stdout=None):
    args = parse_args(argv)
    settings = {k: v for k, v in vars(args).items() if k != 'size'}
    out = stdout if stdout is not None else sys.stdout
    loop = CommandLoop(None, settings, stdin=stdin, stdout=out)

    n = args.size
    if n is None:
        loop.write("Enter maximum index (n): ", end='')
        try:
            n = loop.reader.next_int()
        except (ValueError, EOFError):
            loop.write("Invalid input. Ending the program.")
            return 0

    loop.fenwick = FenwickTree(n)
    loop.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())

#!/usr/bin/env python3
import sys
import argparse

from bf_parser import BFError, filter_source, parse_bf
from bf_tape import Memory

# What an Input instruction does when stdin has nothing left
EOF_ABORT = 'abort'
EOF_ZERO = 'zero'
EOF_UNCHANGED = 'unchanged'
EOF_POLICIES = (EOF_ABORT, EOF_ZERO, EOF_UNCHANGED)


class InputExhausted(BFError):
    pass


class Interpreter:
    def __init__(self, ops=(), stdin=None, stdout=None, memory=None, on_eof=EOF_ABORT):
        if on_eof not in EOF_POLICIES:
            raise ValueError(f"Unknown EOF policy: {on_eof!r}")
        self.ops = list(ops)
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.tape = memory if memory is not None else Memory()
        self.on_eof = on_eof
        self.ptr = 0
        self.pc = 0
        self.step_count = 0

    @property
    def finished(self):
        return self.pc >= len(self.ops)

    def load(self, ops):
        """
        Replace the instruction sequence, keeping pc, ptr and the tape.

        Only valid when the new sequence extends the old one, which is what
        re-resolving an appended-to source produces.
        """
        self.ops = list(ops)

    def read_byte(self):
        data = self.stdin.read(1)
        if data:
            return data[0]
        if self.on_eof == EOF_ZERO:
            return 0
        if self.on_eof == EOF_UNCHANGED:
            return self.tape[self.ptr]
        raise InputExhausted(f"Input exhausted at instruction {self.pc}")

    def run_step(self):
        if self.pc >= len(self.ops):
            return False

        op = self.ops[self.pc]
        self.step_count += 1

        if op.char == '+':
            self.tape[self.ptr] = (self.tape[self.ptr] + 1) % 256
        elif op.char == '-':
            self.tape[self.ptr] = (self.tape[self.ptr] - 1) % 256
        elif op.char == '>':
            self.ptr += 1
        elif op.char == '<':
            self.ptr -= 1
        elif op.char == '.':
            self.stdout.write(bytes([self.tape[self.ptr]]))
            self.stdout.flush()
        elif op.char == ',':
            self.tape[self.ptr] = self.read_byte()
        elif op.char == '[':
            if self.tape[self.ptr] == 0:
                # land on the matching ']', which then falls through
                self.pc = op.jump_target
                return True
        elif op.char == ']':
            if self.tape[self.ptr] != 0:
                self.pc = op.jump_target
                return True
        self.pc += 1
        return True

    def run(self):
        while self.run_step():
            pass
        return self


def run_bf(code, stdin=None, stdout=None, on_eof=EOF_ABORT):
    ops = parse_bf(filter_source(code))
    return Interpreter(ops, stdin=stdin, stdout=stdout, on_eof=on_eof).run()


def run_file(path, stdin, stdout):
    with open(path, 'rb') as f:
        raw = f.read()
    code = filter_source(raw.decode('utf-8'))
    ops = parse_bf(code)
    Interpreter(ops, stdin=stdin, stdout=stdout).run()


def run_interactive(stdin, stdout):
    """
    Read program text line by line, re-resolving the whole buffer after each
    line and resuming where the previous run stopped. Ends on end-of-stream.
    """
    code = ''
    interp = Interpreter(stdin=stdin, stdout=stdout)
    while True:
        stdout.write(b'\n')
        stdout.flush()
        line = stdin.readline()
        if not line:
            break
        code += filter_source(line.decode('utf-8'))
        interp.load(parse_bf(code))
        interp.run()


def main(argv=None, stdin=None, stdout=None):
    parser = argparse.ArgumentParser(description="Run a Brainfuck program.")
    parser.add_argument('file', nargs='?', help="Program source; reads lines from stdin when omitted")
    args = parser.parse_args(argv)

    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer

    try:
        if args.file is not None:
            run_file(args.file, stdin, stdout)
        else:
            run_interactive(stdin, stdout)
    except (OSError, UnicodeDecodeError, BFError) as e:
        stdout.flush()
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
import io
import sys
import argparse

from bf_parser import BFError, filter_source, parse_bf
from bf_runner import EOF_ZERO, Interpreter


class Colors:
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    REVERSE = '\033[7m'


class Debugger:
    def __init__(self, code, input_data=b""):
        self.code_str = filter_source(code)
        self.ops = parse_bf(self.code_str)
        self.out_stream = io.BytesIO()
        # stdin belongs to the command prompt, so ',' reads from input_data
        self.interp = Interpreter(
            self.ops,
            stdin=io.BytesIO(input_data),
            stdout=self.out_stream,
            on_eof=EOF_ZERO,
        )
        self.breakpoints = set()

    @property
    def pc(self):
        return self.interp.pc

    @property
    def ptr(self):
        return self.interp.ptr

    @property
    def tape(self):
        return self.interp.tape

    @property
    def output(self):
        return self.out_stream.getvalue()

    def run_step(self):
        return self.interp.run_step()

    def run_to_breakpoint(self):
        """
        Keep stepping until pc lands on a breakpoint or the program ends.
        Always executes at least one instruction, so continuing from a
        breakpoint moves past it.
        """
        while self.run_step():
            if self.pc in self.breakpoints:
                return True
        return False

    def toggle_breakpoint(self, pc):
        if pc in self.breakpoints:
            self.breakpoints.remove(pc)
            return False
        self.breakpoints.add(pc)
        return True

    def dump_memory(self, addr, count):
        return list(zip(range(addr, addr + count), self.tape.window(addr, count)))

    def print_state(self):
        print(f"\n{Colors.BOLD}--- Step {self.interp.step_count} ---{Colors.ENDC}")
        print(f"PC: {self.pc} / {len(self.ops)}")
        print(f"Ptr: {self.ptr}")

        # Tape window around ptr; addresses may be negative
        window = 8
        start = self.ptr - window
        tape_str = ""
        for i, val in self.dump_memory(start, 2 * window + 1):
            if i == self.ptr:
                tape_str += f"{Colors.REVERSE}[{val:03}]{Colors.ENDC} "
            else:
                tape_str += f" {val:03}  "
        print(f"Loc: {tape_str}")

        context_window = 2
        start_op = max(0, self.pc - context_window)
        end_op = min(len(self.ops), self.pc + context_window + 1)
        for i in range(start_op, end_op):
            op_str = str(self.ops[i])
            if i == self.pc:
                print(f"{Colors.GREEN}-> {i:04}: {op_str}{Colors.ENDC}")
            else:
                print(f"   {i:04}: {op_str}")

        if self.output:
            print(f"Out: {self.output!r}")

    def execute(self, cmd):
        """Run one prompt command. Returns False when the session should end."""
        if cmd.startswith('s'):
            self.run_step()
        elif cmd.startswith('c'):
            if self.run_to_breakpoint():
                print(f"Breakpoint hit at {self.pc}")
        elif cmd.startswith('q'):
            return False
        elif cmd.startswith('m'):
            try:
                parts = cmd.split()
                addr = int(parts[1]) if len(parts) > 1 else self.ptr
                count = int(parts[2]) if len(parts) > 2 else 20
            except ValueError:
                print("Usage: m [addr] [count]")
                return True
            print("Memory Dump:")
            for i, val in self.dump_memory(addr, count):
                print(f"[{i:04}]: {val}")
        elif cmd.startswith('b'):
            try:
                bp = int(cmd.split()[1])
            except (IndexError, ValueError):
                print("Usage: b <pc>")
                return True
            if self.toggle_breakpoint(bp):
                print(f"Breakpoint set at {bp}")
            else:
                print(f"Breakpoint removed at {bp}")
        else:
            print(f"Unknown command: {cmd}")
        return True

    def run(self):
        print("BF Debugger started. Commands: (s)tep, (c)ontinue, (b)reak, (m)em dump, (q)uit, enter to repeat last")
        last_cmd = 's'
        while not self.interp.finished:
            self.print_state()
            try:
                cmd = input(f"{Colors.BLUE}(bf-dbg){Colors.ENDC} ").strip()
            except EOFError:
                break

            if cmd == '':
                cmd = last_cmd
            last_cmd = cmd

            if not self.execute(cmd):
                break

        print("Execution finished.")
        if self.output:
            print(f"Out: {self.output!r}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Step through a Brainfuck program.")
    parser.add_argument('file', help="Program source")
    parser.add_argument('-i', '--input', default='', help="Bytes fed to ',' instructions")
    args = parser.parse_args(argv)

    try:
        with open(args.file, 'rb') as f:
            code = f.read().decode('utf-8')
        dbg = Debugger(code, args.input.encode('utf-8'))
    except (OSError, UnicodeDecodeError, BFError) as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}", file=sys.stderr)
        return 1

    dbg.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())

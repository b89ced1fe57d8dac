OPERATIONS = {
    '+': 'Increment',
    '-': 'Decrement',
    '<': 'MoveLeft',
    '>': 'MoveRight',
    '.': 'Output',
    ',': 'Input',
    '[': 'JumpIfZero',
    ']': 'JumpIfNonZero',
}


class BFError(Exception):
    pass


class BFSyntaxError(BFError):
    def __init__(self, message, position=None):
        super().__init__(message)
        self.position = position


class UnmatchedLeft(BFSyntaxError):
    def __init__(self, position):
        super().__init__(f"Unmatched '[' at position {position}", position)


class UnmatchedRight(BFSyntaxError):
    def __init__(self, position):
        super().__init__(f"Unmatched ']' at position {position}", position)


class Instruction:
    __slots__ = ('char', 'jump_target')

    def __init__(self, char, jump_target=None):
        object.__setattr__(self, 'char', char)
        object.__setattr__(self, 'jump_target', jump_target)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def name(self):
        return OPERATIONS[self.char]

    @property
    def is_jump(self):
        return self.jump_target is not None

    def __eq__(self, other):
        if not isinstance(other, Instruction):
            return NotImplemented
        return (self.char, self.jump_target) == (other.char, other.jump_target)

    def __hash__(self):
        return hash((self.char, self.jump_target))

    def __repr__(self):
        if self.jump_target is not None:
            return f"{self.char} (target: {self.jump_target})"
        return f"{self.char}"


def filter_source(text):
    """Drop everything that is not one of the eight operation characters."""
    return ''.join(c for c in text if c in OPERATIONS)


def parse_bf(code):
    """
    Resolve a filtered operation string into a list of Instructions.

    Every character becomes exactly one instruction, so source positions and
    instruction indices coincide. Each '[' gets the index of its matching ']'
    as jump target and vice versa.

    Raises UnmatchedRight at the first ']' with nothing open, UnmatchedLeft if
    a '[' is still open at the end. Nothing is returned on failure.
    """
    loop_stack = []
    targets = {}

    for i, c in enumerate(code):
        if c not in OPERATIONS:
            raise BFSyntaxError(f"Illegal character {c!r} at position {i}", i)
        if c == '[':
            loop_stack.append(i)
        elif c == ']':
            if not loop_stack:
                raise UnmatchedRight(i)
            start_pc = loop_stack.pop()
            targets[start_pc] = i
            targets[i] = start_pc

    if loop_stack:
        # report the outermost open bracket
        raise UnmatchedLeft(loop_stack[0])

    return [Instruction(c, targets.get(i)) for i, c in enumerate(code)]

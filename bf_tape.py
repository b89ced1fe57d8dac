DENSE_BOUND = 1024


class Memory:
    """
    Signed, unbounded tape of 8-bit cells.

    Addresses in [1, DENSE_BOUND) live in a pre-allocated bytearray, every
    other address (zero and negatives included) is kept in a dict on first
    write. Unwritten cells read as zero either way.
    """

    def __init__(self):
        self.dense = bytearray(DENSE_BOUND)
        self.sparse = {}

    def read(self, address):
        if 0 < address < DENSE_BOUND:
            return self.dense[address]
        return self.sparse.get(address, 0)

    def write(self, address, value):
        value %= 256
        if 0 < address < DENSE_BOUND:
            self.dense[address] = value
        else:
            self.sparse[address] = value

    def __getitem__(self, address):
        return self.read(address)

    def __setitem__(self, address, value):
        self.write(address, value)

    def window(self, start, count):
        return [self.read(addr) for addr in range(start, start + count)]

    def used_addresses(self):
        used = [addr for addr in range(1, DENSE_BOUND) if self.dense[addr]]
        used.extend(addr for addr, val in self.sparse.items() if val)
        return sorted(used)

from bf_tape import DENSE_BOUND, Memory


def test_unwritten_cells_read_zero():
    mem = Memory()
    for addr in (-10**9, -1, 0, 1, DENSE_BOUND - 1, DENSE_BOUND, 10**12):
        assert mem.read(addr) == 0


def test_write_then_read_any_address():
    mem = Memory()
    for addr, val in ((-5, 7), (0, 255), (1, 3), (DENSE_BOUND - 1, 9), (DENSE_BOUND, 11), (10**6, 200)):
        mem.write(addr, val)
        assert mem.read(addr) == val


def test_split_is_invisible():
    mem = Memory()
    mem[0] = 1
    mem[1] = 2
    mem[-1] = 3
    mem[DENSE_BOUND] = 4
    assert mem.window(-1, 3) == [3, 1, 2]
    assert mem[DENSE_BOUND] == 4
    # zero and negatives never touch the dense array
    assert mem.dense[0] == 0
    assert set(mem.sparse) == {0, -1, DENSE_BOUND}


def test_values_kept_to_one_byte():
    mem = Memory()
    mem.write(4, 256)
    mem.write(-4, -1)
    assert mem.read(4) == 0
    assert mem.read(-4) == 255


def test_used_addresses():
    mem = Memory()
    mem[-3] = 1
    mem[5] = 1
    mem[2000] = 1
    mem[7] = 1
    mem[7] = 0
    assert mem.used_addresses() == [-3, 5, 2000]

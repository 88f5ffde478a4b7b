import pytest

from jvc.hashing import BLOCK_SIZE, HashingUnit, hash_bytes, hash_file

INITIAL_DIGEST = "".join(["67452301", "98BADCFE", "EFCDAB89", "C3D2E1F0", "AF9C3FD6"])


def test_empty_input_yields_initial_state():
    assert hash_bytes(b"") == INITIAL_DIGEST


def test_new_unit_reports_initial_state():
    assert HashingUnit().hexdigest() == INITIAL_DIGEST


def test_digest_is_forty_upper_case_hex_digits():
    digest = hash_bytes(b"some file content\n")
    assert len(digest) == 40
    assert all(ch in "0123456789ABCDEF" for ch in digest)


def test_short_block_is_zero_padded():
    assert hash_bytes(b"abc") == hash_bytes(b"abc\0\0\0")


def test_distinct_inputs_give_distinct_digests():
    first = bytes(range(64))
    second = bytes(range(64, 128))
    inputs = [b"a", b"b", b"hello", first + second, second + first]
    assert len({hash_bytes(data) for data in inputs}) == len(inputs)


def test_hash_file_matches_hash_bytes(tmp_path):
    data = bytes(range(256)) * 3 + b"tail"
    path = tmp_path / "data.bin"
    path.write_bytes(data)
    assert hash_file(path) == hash_bytes(data)


def test_empty_file_yields_initial_state(tmp_path):
    path = tmp_path / "empty"
    path.write_bytes(b"")
    assert hash_file(path) == INITIAL_DIGEST


def test_exact_multiple_of_block_size_has_no_extra_block(tmp_path):
    first = b"x" * BLOCK_SIZE
    second = b"y" * BLOCK_SIZE
    path = tmp_path / "blocks"
    path.write_bytes(first + second)

    unit = HashingUnit()
    unit.update(first)
    unit.update(second)
    assert hash_file(path) == unit.hexdigest()


def test_update_rejects_oversized_block():
    with pytest.raises(ValueError):
        HashingUnit().update(b"z" * (BLOCK_SIZE + 1))


def test_reset_restores_initial_state():
    unit = HashingUnit()
    unit.update(b"changes the state")
    assert unit.hexdigest() != INITIAL_DIGEST
    unit.reset()
    assert unit.hexdigest() == INITIAL_DIGEST


def test_unit_hash_file_from_fresh_state_matches_function(tmp_path):
    path = tmp_path / "f.txt"
    path.write_bytes(b"content of the file")
    assert HashingUnit().hash_file(path) == hash_file(path)


def test_unit_hash_file_continues_from_current_state(tmp_path):
    prefix = b"p" * BLOCK_SIZE
    path = tmp_path / "f.txt"
    path.write_bytes(b"rest")
    unit = HashingUnit()
    unit.update(prefix)
    assert unit.hash_file(path) == hash_bytes(prefix + b"rest")


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        hash_file(tmp_path / "absent")
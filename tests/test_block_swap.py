import jax
import jax.numpy as jnp
import numpy as np
import pytest

from hagrid_core import block_swap as bs


def _expected_disjoint(buf, a, b, c, d):
    return buf[:a] + buf[c:d] + buf[b:c] + buf[a:b] + buf[d:]


def _random_bounds(rng, size, count):
    return sorted(int(v) for v in rng.integers(0, size + 1, size=count))


def test_equal_swap_is_self_inverse():
    buf = [1, 2, 3, 4, 5, 6]
    bs.block_swap_equal(buf, 0, 3, 3)
    assert buf == [4, 5, 6, 1, 2, 3]
    bs.block_swap_equal(buf, 0, 3, 3)
    assert buf == [1, 2, 3, 4, 5, 6]


def test_equal_swap_non_adjacent_ndarray():
    arr = np.arange(8)
    bs.block_swap_equal(arr, 1, 5, 2)
    assert arr.tolist() == [0, 5, 6, 3, 4, 1, 2, 7]


def test_equal_swap_zero_length_is_noop():
    buf = [1, 2, 3]
    bs.block_swap_equal(buf, 0, 0, 0)
    assert buf == [1, 2, 3]


def test_contiguous_swap_and_restore():
    buf = [1, 2, 3, 4, 5]
    bs.block_swap_contiguous(buf, 0, 2, 5)
    assert buf == [3, 4, 5, 1, 2]
    bs.block_swap_contiguous(buf, 0, 3, 5)
    assert buf == [1, 2, 3, 4, 5]


def test_contiguous_swap_inside_larger_buffer():
    buf = list("xabcdefy")
    bs.block_swap_contiguous(buf, 1, 5, 7)
    assert "".join(buf) == "xefabcdy"


def test_contiguous_empty_side_is_noop():
    buf = [1, 2, 3, 4]
    bs.block_swap_contiguous(buf, 1, 1, 3)
    assert buf == [1, 2, 3, 4]
    bs.block_swap_contiguous(buf, 1, 3, 3)
    assert buf == [1, 2, 3, 4]


def test_contiguous_matches_rotation(rng):
    for _ in range(200):
        size = int(rng.integers(1, 40))
        a, b, c = _random_bounds(rng, size, 3)
        buf = list(range(size))
        expected = buf[:a] + buf[b:c] + buf[a:b] + buf[c:]
        bs.block_swap_contiguous(buf, a, b, c)
        assert buf == expected


def test_disjoint_swap_example():
    buf = list(range(10))
    bs.block_swap_disjoint(buf, 1, 3, 6, 9)
    assert buf == [0, 6, 7, 8, 3, 4, 5, 1, 2, 9]


def test_disjoint_with_empty_middle_equals_contiguous():
    left = list(range(9))
    right = list(range(9))
    bs.block_swap_disjoint(left, 2, 4, 4, 8)
    bs.block_swap_contiguous(right, 2, 4, 8)
    assert left == right


def test_disjoint_matches_reference(rng):
    for _ in range(200):
        size = int(rng.integers(1, 40))
        a, b, c, d = _random_bounds(rng, size, 4)
        buf = list(range(size))
        expected = _expected_disjoint(buf, a, b, c, d)
        bs.block_swap_disjoint(buf, a, b, c, d)
        assert buf == expected


def test_host_swaps_mutate_in_place():
    arr = np.arange(6, dtype=np.float32)
    view = arr[:]
    assert bs.block_swap_disjoint(arr, 0, 1, 4, 6) is None
    assert view.tolist() == [4.0, 5.0, 1.0, 2.0, 3.0, 0.0]



@pytest.mark.backend_matrix
@pytest.mark.usefixtures("backend_device")
def test_equal_swap_jax_self_inverse():
    buf = jnp.array([1, 2, 3, 4, 5, 6], dtype=jnp.int32)
    once = bs.block_swap_equal_jax(buf, 0, 3, 3)
    assert jax.device_get(once).tolist() == [4, 5, 6, 1, 2, 3]
    twice = bs.block_swap_equal_jax(once, 0, 3, 3)
    assert bool(jnp.array_equal(twice, buf))


@pytest.mark.backend_matrix
@pytest.mark.usefixtures("backend_device")
def test_contiguous_swap_jax_and_restore():
    buf = jnp.array([1, 2, 3, 4, 5], dtype=jnp.int32)
    out = bs.block_swap_contiguous_jax(buf, 0, 2, 5)
    assert jax.device_get(out).tolist() == [3, 4, 5, 1, 2]
    back = bs.block_swap_contiguous_jax(out, 0, 3, 5)
    assert jax.device_get(back).tolist() == [1, 2, 3, 4, 5]


@pytest.mark.backend_matrix
@pytest.mark.usefixtures("backend_device")
def test_disjoint_swap_jax_matches_host(rng):
    size = 24
    buf = jnp.arange(size, dtype=jnp.float32)
    for _ in range(20):
        a, b, c, d = _random_bounds(rng, size, 4)
        host = np.arange(size, dtype=np.float32)
        bs.block_swap_disjoint(host, a, b, c, d)
        dev = bs.block_swap_disjoint_jax(buf, a, b, c, d)
        assert np.array_equal(np.asarray(jax.device_get(dev)), host)
    # Input buffer is never modified.
    assert jax.device_get(buf).tolist() == list(range(size))


@pytest.mark.backend_matrix
@pytest.mark.usefixtures("backend_device")
def test_block_swap_jax_traced_bounds_under_vmap():
    buf = jnp.arange(6, dtype=jnp.int32)
    bufs = jnp.stack([buf, buf])
    splits = jnp.array([2, 4], dtype=jnp.int32)
    out = jax.vmap(lambda row, b: bs.block_swap_contiguous_jax(row, 0, b, 6))(
        bufs, splits
    )
    rows = jax.device_get(out).tolist()
    assert rows[0] == [2, 3, 4, 5, 0, 1]
    assert rows[1] == [4, 5, 0, 1, 2, 3]

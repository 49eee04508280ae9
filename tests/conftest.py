import os
import sys

import numpy as np
import pytest

# Enable block guards in tests unless explicitly overridden; keep JAX from
# grabbing the whole GPU when the matrix runs on one.
os.environ.setdefault("HAGRID_TEST_GUARDS", "1")
os.environ.setdefault("XLA_PYTHON_CLIENT_PREALLOCATE", "false")

import jax

# Ensure src/ and the repo root are importable without an editable install.
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
for _path in (ROOT, SRC):
    if _path not in sys.path:
        sys.path.insert(0, _path)

_MARKER_DESCRIPTIONS = {
    "backend_matrix": "run the test on cpu and gpu (when available) in one session",
}


def pytest_configure(config):
    for name, desc in _MARKER_DESCRIPTIONS.items():
        config.addinivalue_line("markers", f"{name}: {desc}")


def _backend_matrix_backends():
    backends = ["cpu"]
    try:
        gpu_devices = jax.devices("gpu")
    except Exception:
        gpu_devices = []
    if gpu_devices:
        backends.append("gpu")
    return backends


def pytest_generate_tests(metafunc):
    marker = metafunc.definition.get_closest_marker("backend_matrix")
    if marker and "backend_device" in metafunc.fixturenames:
        backends = _backend_matrix_backends()
        ids = [f"{backend}-backend" for backend in backends]
        metafunc.parametrize("backend_device", backends, ids=ids, indirect=True)


@pytest.fixture
def backend_device(request):
    backend = getattr(request, "param", None)
    if backend is None:
        return None
    return jax.devices(backend)[0]


@pytest.fixture(autouse=True)
def _set_default_device(request):
    if request.node.get_closest_marker("backend_matrix"):
        device = request.getfixturevalue("backend_device")
    else:
        device = jax.devices("cpu")[0]
    with jax.default_device(device):
        yield


@pytest.fixture
def rng():
    return np.random.default_rng(0)

"""Pytest configuration for the resbridge test suite.

Hypothesis profiles: ``dev`` (default), ``ci`` (selected by CI=true) and
``verbose``. HYPOTHESIS_PROFILE overrides the detection.

Tests marked ``fuzz`` are skipped unless run with ``pytest -m fuzz`` or by
naming tests/test_fuzz_report.py.
"""

import os

import pytest
from hypothesis import Verbosity, settings

settings.register_profile("dev", max_examples=200)
settings.register_profile("ci", max_examples=50, derandomize=True, print_blob=True)
settings.register_profile("verbose", max_examples=100, verbosity=Verbosity.verbose)


def _detect_profile() -> str:
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker."""
    config.addinivalue_line(
        "markers",
        "fuzz: Long-running property tests (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    if any("test_fuzz_report" in str(arg) for arg in config.invocation_params.args):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


@pytest.fixture
def write_values(tmp_path):  # type: ignore[no-untyped-def]
    """Factory writing ``res/<dir_name>/<file_name>`` with a <resources> body."""
    res_dir = tmp_path / "res"

    def _write(dir_name: str, body: str, file_name: str = "strings.xml"):  # type: ignore[no-untyped-def]
        values_dir = res_dir / dir_name
        values_dir.mkdir(parents=True, exist_ok=True)
        path = values_dir / file_name
        path.write_text(
            f'<?xml version="1.0" encoding="utf-8"?>\n<resources>\n{body}\n</resources>\n',
            encoding="utf-8",
        )
        return res_dir

    return _write

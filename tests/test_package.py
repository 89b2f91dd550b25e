"""Tests for lingmedia package."""


def test_package_imports():
    """Test that the package can be imported successfully."""
    import lingmedia

    assert lingmedia is not None


def test_package_version():
    """Test that the package has a version string."""
    from lingmedia import __version__

    assert __version__ == "0.4.0"

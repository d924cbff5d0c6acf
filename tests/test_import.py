"""Basic import tests to verify package structure."""


def test_import_cdtsim():
    """Verify main package imports."""
    import cdtsim
    assert cdtsim.__version__ == "0.1.0"


def test_import_core():
    """Verify core module structure exists."""
    from cdtsim import core
    assert hasattr(core, "__doc__")
    assert hasattr(core, "Metropolis")


def test_import_geometry():
    """Verify geometry module structure exists."""
    from cdtsim import geometry
    assert hasattr(geometry, "SimplexLedger")


def test_import_viz():
    """Verify viz module structure exists."""
    from cdtsim import viz
    assert hasattr(viz, "plot_state_history")

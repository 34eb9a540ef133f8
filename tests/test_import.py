"""Basic import tests to verify package structure."""


def test_import_starfield():
    """Verify main package imports."""
    import starfield
    assert starfield.__version__ == "0.1.0"


def test_import_core():
    """Verify core module structure exists."""
    from starfield import core
    assert hasattr(core, "StarfieldSimulation")


def test_import_analysis():
    """Verify analysis module structure exists."""
    from starfield import analysis
    assert hasattr(analysis, "__doc__")


def test_import_viz():
    """Verify viz module structure exists."""
    import matplotlib
    matplotlib.use("Agg")
    from starfield import viz
    assert hasattr(viz, "plot_starfield")

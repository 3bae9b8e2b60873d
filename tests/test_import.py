"""Basic import tests to verify package structure."""


def test_import_miasma():
    """Verify main package imports."""
    import miasma
    assert miasma.__version__ == "0.1.0"


def test_import_core():
    """Verify core module structure exists."""
    from miasma import core
    assert hasattr(core, "FluidGrid")
    assert hasattr(core, "calculate_flow")


def test_import_world():
    """Verify world module structure exists."""
    from miasma import world
    assert hasattr(world, "MiasmaWorld")


def test_import_analysis():
    """Verify analysis module structure exists."""
    from miasma import analysis
    assert hasattr(analysis, "__doc__")


def test_import_viz():
    """Verify viz module structure exists."""
    from miasma import viz
    assert hasattr(viz, "render_fluid")

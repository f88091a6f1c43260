"""Test basic package imports."""


def test_package_import():
    """Test that the main package can be imported."""
    import uncommitted_scanner

    assert uncommitted_scanner.__version__ == "0.1.0"


def test_main_module_import():
    """Test that main modules can be imported."""
    from uncommitted_scanner import interfaces, main

    assert callable(main.main)
    assert hasattr(interfaces, "IVersionControlGateway")


def test_models_import():
    """Test that model modules can be imported."""
    from uncommitted_scanner.models import change, config, repository

    assert change.ChangeStatus.UNTRACKED.value == "?"
    assert config.ScannerConfig().box_width == 80
    assert repository.ScanResult().repository_count == 0


def test_components_import():
    from uncommitted_scanner.components import (
        GitGateway,
        ReportRenderer,
        RepositoryScanner,
        StatusParser,
        is_repository_root,
    )

    assert all(
        obj is not None
        for obj in (GitGateway, ReportRenderer, RepositoryScanner, StatusParser, is_repository_root)
    )

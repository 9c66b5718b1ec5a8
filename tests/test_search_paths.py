"""Tests for candidate directory list construction."""

from reference_resolver.diagnostics import DISCOVERY_FAILED
from reference_resolver.models import ResolutionConfig
from reference_resolver.platform import NullPlatform
from reference_resolver.search_paths import build_search_paths
from reference_resolver.testing import LogRecorder
from reference_resolver.testing import StaticPlatform
from reference_resolver.testing import registry_failure


def make_config(recorder: LogRecorder, **values) -> ResolutionConfig:
    return ResolutionConfig(**values, **recorder.sinks())


class TestBuildSearchPaths:
    """Tests for build_search_paths."""

    def test_configured_directories_in_priority_order(self, recorder: LogRecorder) -> None:
        """Framework, explicit, core library, then implicit directories."""
        config = make_config(
            recorder,
            target_framework_directories=["/fw1", "/fw2"],
            explicit_include_directories=["/inc1", "/inc2"],
            core_library_directory="/core",
            implicit_include_directory="/implicit",
            output_directory="/out",
        )

        assert build_search_paths(config, NullPlatform()) == [
            "/fw1",
            "/fw2",
            "/inc1",
            "/inc2",
            "/core",
            "/implicit",
        ]

    def test_empty_directories_are_skipped(self, recorder: LogRecorder) -> None:
        """Unconfigured (empty) entries are not searched."""
        config = make_config(recorder, explicit_include_directories=["", "/inc"])
        assert build_search_paths(config, NullPlatform()) == ["/inc"]

    def test_platform_folders_are_appended_last(self, recorder: LogRecorder) -> None:
        """Registry-discovered folders follow every configured directory."""
        platform = StaticPlatform(assembly_folders=["/registry/a", "", "/registry/b"])
        config = make_config(recorder, explicit_include_directories=["/inc"], implicit_include_directory="/implicit")

        assert build_search_paths(config, platform) == ["/inc", "/implicit", "/registry/a", "/registry/b"]

    def test_non_windows_platform_is_not_queried(self, recorder: LogRecorder) -> None:
        """Discovery only runs on Windows-like hosts."""
        platform = StaticPlatform(windows_like=False, assembly_folders=["/registry/a"])
        config = make_config(recorder, explicit_include_directories=["/inc"])

        assert build_search_paths(config, platform) == ["/inc"]
        assert platform.discovery_calls == 0

    def test_discovery_failure_contributes_nothing(self, recorder: LogRecorder) -> None:
        """A failing registry is reported and otherwise ignored."""
        platform = StaticPlatform(discovery_error=registry_failure("access denied"))
        config = make_config(recorder, explicit_include_directories=["/inc"])

        assert build_search_paths(config, platform) == ["/inc"]
        assert recorder.warning_codes == [DISCOVERY_FAILED]
        assert "access denied" in recorder.warnings[0][1]

    def test_unexpected_discovery_error_is_absorbed(self, recorder: LogRecorder) -> None:
        """Any exception from discovery is converted to a warning."""
        platform = StaticPlatform(discovery_error=RuntimeError("boom"))
        config = make_config(recorder)

        assert build_search_paths(config, platform) == []
        assert recorder.warning_codes == [DISCOVERY_FAILED]

    def test_no_platform(self, recorder: LogRecorder) -> None:
        """Without a platform only configured directories are used."""
        config = make_config(recorder, core_library_directory="/core")
        assert build_search_paths(config, None) == ["/core"]

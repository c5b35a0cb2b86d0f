"""
Editing Session Integration Tests
=================================

Tests the full path from a field configuration and value through font
resolution, size solving and offset calculation, synchronously and through
the recalculation scheduler.
"""

import threading

import pytest

from textfit.core.config import LayoutSettings
from textfit.core.exceptions import FontLoadError, FontNotFoundError
from textfit.core.models import FontSizeBounds, TextFieldConfig
from textfit.editing.session import EditingSession

LONG_TEXT = " ".join(["word"] * 40)
WAIT_TIMEOUT = 5


@pytest.mark.integration
class TestEditingSession:
    """EditingSession integration tests."""

    def test_initial_render(self, session, sample_field_config):
        """Test synchronous layout of a short value."""
        layout = session.layout("name", sample_field_config, "Hello")

        assert layout.font_name == "TestSans"
        assert layout.font_size == 20
        assert layout.is_dynamic
        assert not layout.overflow
        assert layout.adjustment.top_offset == pytest.approx(4.0)
        assert layout.adjustment.bottom_offset == 0.0
        assert session.last_font_size("name") == 20

    def test_long_value_shrinks(self, session, sample_field_config):
        layout = session.layout("name", sample_field_config, LONG_TEXT)

        assert layout.font_size == 10.0
        assert layout.fitting.line_count == 5
        assert layout.adjustment.top_offset == pytest.approx(2.0)

    def test_overflow_is_reported(self, session, sample_field_config):
        config = sample_field_config.model_copy(
            update={"dynamic_font_size": FontSizeBounds(min=12, max=20)}
        )

        layout = session.layout("name", config, LONG_TEXT)

        assert layout.overflow
        assert layout.font_size == 12

    def test_empty_value_uses_static_size(self, session, sample_field_config):
        layout = session.layout("name", sample_field_config, "")

        assert layout.font_size == sample_field_config.font_size
        assert layout.fitting is None

    def test_static_field(self, session):
        config = TextFieldConfig(width=70, height=20, font_name="WideSerif", font_size=12)

        layout = session.layout("static", config, "Hello")

        assert layout.font_name == "WideSerif"
        assert layout.font_size == 12
        assert layout.adjustment.top_offset == pytest.approx(3.322265625)

    def test_static_size_from_environment(self, repository, monkeypatch):
        """Test that settings supply the size and line height a config leaves unset."""
        monkeypatch.setenv("TEXTFIT_DEFAULT_FONT_SIZE", "9")
        monkeypatch.setenv("TEXTFIT_DEFAULT_LINE_HEIGHT", "1.5")
        unset = TextFieldConfig(width=70, height=20, font_name="TestSans")
        explicit = TextFieldConfig(
            width=70, height=20, font_name="TestSans", font_size=12, line_height=1.0
        )

        with EditingSession(repository) as editing:
            defaulted = editing.layout("unset", unset, "Hello")
            kept = editing.layout("explicit", explicit, "Hello")

        assert defaulted.font_size == 9
        assert defaulted.adjustment.top_offset == pytest.approx(6.3)
        assert kept.font_size == 12
        assert kept.adjustment.top_offset == pytest.approx(2.4)

    def test_default_font_when_unnamed(self, session):
        config = TextFieldConfig(width=70, height=20)

        layout = session.layout("unnamed", config, "Hello")

        assert layout.font_name == "TestSans"

    def test_unknown_font_fails(self, session):
        config = TextFieldConfig(width=70, height=20, font_name="Missing")

        with pytest.raises(FontNotFoundError):
            session.layout("name", config, "Hello")

    def test_malformed_font_fails_layout(
        self, repository, corrupt_descriptor, sample_field_config
    ):
        """Test that a corrupt font surfaces FontLoadError with no partial result."""
        repository.register(corrupt_descriptor)
        config = sample_field_config.model_copy(update={"font_name": "Broken"})
        published = []

        with EditingSession(repository) as editing:
            with pytest.raises(FontLoadError):
                editing.layout("name", config, "Hello")
            future = editing.schedule_edit("name", config, "Hello", published.append)
            with pytest.raises(FontLoadError):
                future.result(timeout=WAIT_TIMEOUT)

            assert editing.last_font_size("name") is None
        assert published == []

    def test_previous_size_seeds_next_edit(self, session, sample_field_config):
        """Test that edits after the first render match a fresh solve."""
        session.layout("name", sample_field_config, "Hello")
        seeded = session.layout("name", sample_field_config, LONG_TEXT)

        with EditingSession(session.repository) as fresh:
            unseeded = fresh.layout("name", sample_field_config, LONG_TEXT)

        assert seeded.font_size == unseeded.font_size

    def test_sessions_do_not_share_fonts(self, repository):
        with EditingSession(repository) as first, EditingSession(repository) as second:
            first_font = first.resolve_font("TestSans")
            second_font = second.resolve_font("TestSans")

            assert first_font is not second_font
            assert "WideSerif" not in second.cache

    def test_prefetch(self, session):
        parsed = session.prefetch(["TestSans", "WideSerif"])

        assert set(parsed) == {"TestSans", "WideSerif"}
        assert session.resolve_font("WideSerif") is parsed["WideSerif"]
        assert session.cache.get_stats().hits == 1


@pytest.mark.integration
class TestScheduledEdits:
    """Recalculation through the session scheduler."""

    def test_schedule_edit_publishes(self, session, sample_field_config):
        published = []

        future = session.schedule_edit("name", sample_field_config, LONG_TEXT, published.append)
        layout = future.result(timeout=WAIT_TIMEOUT)

        assert layout.font_size == 10.0
        assert published == [layout]
        assert session.last_font_size("name") == 10.0

    def test_rapid_edits_publish_last_value(self, repository, sample_field_config):
        """Test that only the final value of a burst of edits is published."""
        settings = LayoutSettings(debounce_seconds=0.1)
        published = []
        values = [LONG_TEXT[:length] for length in range(10, len(LONG_TEXT) + 1, 10)]
        values.append(LONG_TEXT)

        with EditingSession(repository, settings) as editing:
            futures = [
                editing.schedule_edit("name", sample_field_config, value, published.append)
                for value in values
            ]
            final = futures[-1].result(timeout=WAIT_TIMEOUT)

        assert published == [final]
        assert final.font_size == 10.0

    def test_stale_edit_does_not_overwrite(self, repository, sample_field_config, monkeypatch):
        """Test that a slow superseded computation never publishes."""
        started = threading.Event()
        release = threading.Event()
        published = []

        with EditingSession(repository) as editing:
            compute = editing._compute

            def slow_compute(field_id, config, value):
                if value == "Hello":
                    started.set()
                    release.wait(WAIT_TIMEOUT)
                return compute(field_id, config, value)

            monkeypatch.setattr(editing, "_compute", slow_compute)

            stale = editing.schedule_edit("name", sample_field_config, "Hello", published.append)
            assert started.wait(WAIT_TIMEOUT)
            fresh = editing.schedule_edit(
                "name", sample_field_config, LONG_TEXT, published.append
            ).result(timeout=WAIT_TIMEOUT)
            release.set()

            assert stale.result(timeout=WAIT_TIMEOUT) is None

        assert published == [fresh]
        assert fresh.font_size == 10.0

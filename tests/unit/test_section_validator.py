"""Unit tests for the homepage section save gate."""

import pytest

from catalog_admin.models import (
    About,
    AboutData,
    BilingualText,
    Feature,
    FeaturesData,
    HeroSliderData,
    HomeSection,
    OpaqueData,
    SectionId,
    Slide,
    Stat,
    StatsData,
)
from catalog_admin.sections.validator import is_valid, validate_home_section


def _section(section_type: str, data) -> HomeSection:
    return HomeSection(section=SectionId(f"{section_type}-1"), type=section_type, data=data)


def _feature(title_de="Schnell", title_en="Fast", content_de="Text", content_en="Text") -> Feature:
    return Feature(
        icon="Zap",
        title=BilingualText(de=title_de, en=title_en),
        content=BilingualText(de=content_de, en=content_en),
    )


@pytest.mark.unit
class TestHeroSlider:
    def test_no_slides_fails(self):
        """Should reject a slider without slides and say what is missing."""
        reason = validate_home_section(_section("hero-slider", HeroSliderData()))

        assert reason is not None
        assert "at least one slide" in reason

    def test_one_slide_with_image_is_valid(self):
        """Should accept the slider once a slide with an image is added."""
        section = _section("hero-slider", HeroSliderData())
        section.data.slides.append(Slide(image="x.png"))

        assert validate_home_section(section) is None
        assert is_valid(section)

    def test_slide_without_image_is_named(self):
        """Should name the slide without an image by its 1-based position."""
        data = HeroSliderData(slides=[Slide(image="a.png"), Slide(image="")])

        assert validate_home_section(_section("hero-slider", data)) == "Slide #2 is missing an image"


@pytest.mark.unit
class TestFeatures:
    def test_no_features_fails(self):
        """Should reject a features section without features."""
        assert "at least one feature" in validate_home_section(_section("features", FeaturesData()))

    def test_missing_english_title_names_feature(self):
        """Should name the feature whose English title is empty."""
        data = FeaturesData(features=[_feature(), _feature(title_en="")])

        reason = validate_home_section(_section("features", data))

        assert reason == "Feature #2 is missing the English title"

    @pytest.mark.parametrize(
        "kwargs,expected",
        [
            ({"title_de": ""}, "Feature #1 is missing the German title"),
            ({"content_de": ""}, "Feature #1 is missing the German content"),
            ({"content_en": ""}, "Feature #1 is missing the English content"),
        ],
    )
    def test_each_language_is_required(self, kwargs, expected):
        """Should require both languages for title and content."""
        data = FeaturesData(features=[_feature(**kwargs)])

        assert validate_home_section(_section("features", data)) == expected

    def test_first_failure_wins(self):
        """Should report only the first failing rule."""
        data = FeaturesData(features=[_feature(title_de="", content_en=""), _feature(title_en="")])

        assert validate_home_section(_section("features", data)) == "Feature #1 is missing the German title"

    def test_complete_features_are_valid(self):
        """Should accept features with every text filled in."""
        assert validate_home_section(_section("features", FeaturesData(features=[_feature()]))) is None

    def test_whitespace_counts_as_filled(self):
        """Should treat whitespace-only text as non-empty."""
        data = FeaturesData(features=[_feature(title_en=" ")])

        assert validate_home_section(_section("features", data)) is None


@pytest.mark.unit
class TestStats:
    def test_no_stats_fails(self):
        """Should reject a stats section without stats."""
        assert "at least one stat" in validate_home_section(_section("stats", StatsData()))

    def test_missing_number(self):
        """Should require a number on every stat."""
        data = StatsData(stats=[Stat(number="", label=BilingualText(de="Jahre", en="Years"))])

        assert validate_home_section(_section("stats", data)) == "Stat #1 is missing a number"

    def test_missing_label(self):
        """Should name the stat whose English label is empty."""
        data = StatsData(
            stats=[
                Stat(number="25", label=BilingualText(de="Jahre", en="Years")),
                Stat(number="3", label=BilingualText(de="Standorte", en="")),
            ]
        )

        assert validate_home_section(_section("stats", data)) == "Stat #2 is missing the English label"

    def test_complete_stats_are_valid(self):
        """Should accept stats with number and both labels."""
        data = StatsData(stats=[Stat(number="25", label=BilingualText(de="Jahre", en="Years"))])

        assert validate_home_section(_section("stats", data)) is None


@pytest.mark.unit
class TestAbout:
    def _about(self, **overrides) -> AboutData:
        about = About(
            title=BilingualText(de="Über uns", en="About us"),
            content=BilingualText(de="Text", en="Text"),
            image="about.png",
            link="/about",
        )
        for key, value in overrides.items():
            setattr(about, key, value)
        return AboutData(about=about)

    def test_complete_about_is_valid(self):
        """Should accept a fully filled about section."""
        assert validate_home_section(_section("about", self._about())) is None

    def test_empty_about_fails_on_title_first(self):
        """Should check the title before content and image."""
        assert validate_home_section(_section("about", AboutData())) == "About section is missing the German title"

    def test_missing_image(self):
        """Should require an image."""
        assert validate_home_section(_section("about", self._about(image=""))) == "About section is missing an image"

    def test_link_is_optional(self):
        """Should not require a link."""
        assert validate_home_section(_section("about", self._about(link=""))) is None


@pytest.mark.unit
def test_unknown_type_has_no_rules():
    """Should let sections of unknown type through unchecked."""
    assert validate_home_section(_section("video", OpaqueData(raw={}))) is None

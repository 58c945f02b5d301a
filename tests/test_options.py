from types import SimpleNamespace

from annotator_bridge.annotator import (
    AnnotationOptions,
    ClassificationOptions,
    OptionsDefaulting,
    OptionsKind,
    SelectionOptions,
    read_annotation_options,
    read_classification_options,
    read_options,
    read_selection_options,
)

FULL = {"locales": "en-US", "reference_timezone": "Europe/Zurich", "reference_time_ms_utc": 1546300800000}


class GetterOptions:
    def __init__(self, locales, timezone, time_ms):
        self._locales = locales
        self._timezone = timezone
        self._time_ms = time_ms

    def get_locales(self):
        return self._locales

    def get_reference_timezone(self):
        return self._timezone

    def get_reference_time_ms_utc(self):
        return self._time_ms


class BrokenTimezoneOptions(GetterOptions):
    def get_reference_timezone(self):
        raise LookupError("timezone unavailable")


class WrongArityOptions(GetterOptions):
    def get_reference_time_ms_utc(self, unit):
        return 0


def test_absent_options_return_empty_records():
    assert read_selection_options(None) == SelectionOptions()
    assert read_classification_options(None) == ClassificationOptions(locales="", reference_timezone="", reference_time_ms_utc=0)
    assert read_annotation_options(None) == AnnotationOptions()


def test_mapping_options():
    options = read_classification_options(FULL)
    assert options == ClassificationOptions("en-US", "Europe/Zurich", 1546300800000)
    assert read_selection_options({"locales": "de"}) == SelectionOptions("de")


def test_locale_alias_in_mapping():
    assert read_selection_options({"locale": "fr"}) == SelectionOptions("fr")


def test_getter_and_attribute_objects():
    getters = GetterOptions("en", "UTC", 42)
    assert read_annotation_options(getters) == AnnotationOptions("en", "UTC", 42)
    attrs = SimpleNamespace(locales="ja", reference_timezone="Asia/Tokyo", reference_time_ms_utc=7)
    assert read_annotation_options(attrs) == AnnotationOptions("ja", "Asia/Tokyo", 7)


def test_selection_object_with_only_locales_getter():
    class LocalesOnly:
        def get_locales(self):
            return "it"

    assert read_selection_options(LocalesOnly()) == SelectionOptions("it")
    assert read_classification_options(LocalesOnly()) == ClassificationOptions()


def test_any_unreadable_field_discards_whole_record():
    assert read_classification_options({"locales": "en", "reference_timezone": "UTC"}) == ClassificationOptions()
    assert read_annotation_options(BrokenTimezoneOptions("en", "UTC", 5)) == AnnotationOptions()
    assert read_annotation_options(WrongArityOptions("en", "UTC", 5)) == AnnotationOptions()
    assert read_classification_options({**FULL, "reference_time_ms_utc": "soon"}) == ClassificationOptions()
    assert read_classification_options({**FULL, "reference_time_ms_utc": True}) == ClassificationOptions()
    assert read_selection_options(object()) == SelectionOptions()


def test_per_field_defaulting_keeps_readable_fields():
    options = read_classification_options(
        {"locales": "en", "reference_time_ms_utc": 99}, defaulting=OptionsDefaulting.PER_FIELD
    )
    assert options == ClassificationOptions(locales="en", reference_timezone="", reference_time_ms_utc=99)

    options = read_annotation_options(BrokenTimezoneOptions("en", "UTC", 5), OptionsDefaulting.PER_FIELD)
    assert options == AnnotationOptions(locales="en", reference_timezone="", reference_time_ms_utc=5)


def test_null_strings_read_as_empty():
    options = read_classification_options({**FULL, "reference_timezone": None})
    assert options.reference_timezone == ""
    assert options.locales == "en-US"


def test_read_options_accepts_kind_values():
    assert read_options({"locales": "en"}, "selection") == SelectionOptions("en")
    assert isinstance(read_options(None, OptionsKind.ANNOTATION), AnnotationOptions)


def test_attribute_objects_accept_locale_alias():
    attrs = SimpleNamespace(locale="pt", reference_timezone="UTC", reference_time_ms_utc=3)
    assert read_classification_options(attrs) == ClassificationOptions("pt", "UTC", 3)
    assert read_selection_options(SimpleNamespace(locale="pt")) == SelectionOptions("pt")

import json
from typing import List, Optional

import pytest

from annotator_bridge.annotator import (
    AnnotatedSpan,
    AnnotatorBackend,
    AnnotatorBridge,
    AnnotatorEngine,
    ClassificationResult,
    DatetimeResult,
    HandleRegistry,
    ModelHeader,
)

EMOJI = "\U0001F600"

SAMPLE_MODEL = {
    "name": "test-annotator",
    "version": 608,
    "locales": "en,de",
    "entities": {
        "tomorrow": {"collection": "date", "score": 0.9, "datetime": [1546300800000, 4]},
        EMOJI: {"collection": "emoji", "score": 0.5, "knowledge": "grinning"},
        "Zurich": {"collection": "address", "score": 0.75},
    },
}


class FakeEngine(AnnotatorEngine):
    """
    Looks up literal entity strings from the model; spans are codepoints.
    """

    def __init__(self, model: dict):
        self.entities = model.get("entities", {})
        self.closed = False
        self.knowledge_config: Optional[bytes] = None
        self.calls: List[tuple] = []

    def _result(self, key: str) -> ClassificationResult:
        entity = self.entities[key]
        datetime_parse = None
        if "datetime" in entity:
            datetime_parse = DatetimeResult(*entity["datetime"])
        return ClassificationResult(
            collection=entity["collection"],
            score=entity["score"],
            datetime_parse_result=datetime_parse,
            serialized_knowledge_result=entity.get("knowledge", "").encode("utf-8"),
        )

    def suggest_selection(self, context, click_indices, options):
        self.calls.append(("suggest_selection", context, click_indices, options))
        begin, end = click_indices
        if begin < 0 or end < 0:
            return (-1, -1)
        while begin > 0 and not context[begin - 1].isspace():
            begin -= 1
        while end < len(context) and not context[end].isspace():
            end += 1
        return (begin, end)

    def classify_text(self, context, selection_indices, options):
        self.calls.append(("classify_text", context, selection_indices, options))
        begin, end = selection_indices
        selected = context[begin:end]
        if selected in self.entities:
            return [self._result(selected)]
        return []

    def annotate(self, context, options):
        self.calls.append(("annotate", context, options))
        spans = []
        for key in self.entities:
            start = context.find(key)
            while start != -1:
                spans.append(AnnotatedSpan(span=(start, start + len(key)), classification=[self._result(key)]))
                start = context.find(key, start + len(key))
        return sorted(spans, key=lambda s: s.span)

    def initialize_knowledge_engine(self, serialized_config):
        self.knowledge_config = serialized_config
        return bool(serialized_config)

    def close(self):
        self.closed = True


class FakeBackend(AnnotatorBackend):
    def __init__(self):
        self.engines: List[FakeEngine] = []

    def _parse(self, buffer) -> Optional[dict]:
        try:
            model = json.loads(bytes(buffer).decode("utf-8"))
        except ValueError:
            return None
        return model if isinstance(model, dict) else None

    def load(self, buffer):
        model = self._parse(buffer)
        if model is None:
            return None
        engine = FakeEngine(model)
        self.engines.append(engine)
        return engine

    def view_model(self, buffer):
        model = self._parse(buffer)
        if model is None:
            return None
        return ModelHeader(locales=model.get("locales"), version=model.get("version"), name=model.get("name"))


@pytest.fixture
def model_path(tmp_path):
    path = tmp_path / "model.json"
    path.write_text(json.dumps(SAMPLE_MODEL), encoding="utf-8")
    return path


@pytest.fixture
def broken_model_path(tmp_path):
    path = tmp_path / "broken.bin"
    path.write_bytes(b"\x00\x01not a model")
    return path


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def registry(backend):
    return HandleRegistry(backend)


@pytest.fixture
def bridge(registry):
    return AnnotatorBridge(registry)

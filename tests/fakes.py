import io
import json
from types import SimpleNamespace

from PIL import Image

VALID_PLANT = {
    "plantName": "Tomato",
    "scientificName": "Solanum lycopersicum",
    "healthStatus": "Healthy",
    "confidence": 92,
    "treatments": ["Keep watering consistent", "Mulch around the base"],
    "description": "Leaves look healthy with no visible lesions.",
    "youtubeSuggestions": [
        {
            "title": "Tomato Care Basics",
            "channelName": "Epic Gardening",
            "summary": "Covers watering, pruning and feeding tomatoes.",
            "searchQuery": "tomato plant care basics",
        }
    ],
}

VALID_LOCATION = {
    "locationName": "Napa Valley, California, USA",
    "suitabilityScore": 78,
    "isSuitableForPlanting": True,
    "climateZone": "Mediterranean",
    "soilType": "Loamy",
    "bestCrops": ["Garlic", "Fava Beans", "Kale"],
    "reasoning": "Mild autumn temperatures and upcoming winter rain suit cool-season crops.",
}


class FakeGenAIClient:
    """Stands in for GenAIClient; returns canned text or raises."""

    timeout = 1.0

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def generate_content(self, payload, schema, schema_name, temperature):
        self.calls.append({
            "payload": payload,
            "schema": schema,
            "schema_name": schema_name,
            "temperature": temperature,
        })
        if self.error is not None:
            raise self.error
        return self.response


def json_client(data) -> FakeGenAIClient:
    return FakeGenAIClient(response=json.dumps(data))


def make_png(size=(8, 8), color=(34, 139, 34)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeSupabaseClient:
    """Just enough of the supabase client for a key/value table."""

    def __init__(self, rows=None, read_error=None):
        self.rows = dict(rows or {})
        self.read_error = read_error
        self.upserts = []

    def table(self, name):
        return _FakeQuery(self)


class _FakeQuery:
    def __init__(self, client):
        self.client = client
        self.key = None
        self.row = None

    def select(self, columns):
        return self

    def eq(self, column, value):
        self.key = value
        return self

    def upsert(self, row):
        self.row = row
        return self

    def execute(self):
        if self.row is not None:
            self.client.upserts.append(self.row)
            self.client.rows[self.row["key"]] = self.row["value"]
            return SimpleNamespace(data=[self.row])
        if self.client.read_error is not None:
            raise self.client.read_error
        value = self.client.rows.get(self.key)
        return SimpleNamespace(data=[] if value is None else [{"key": self.key, "value": value}])

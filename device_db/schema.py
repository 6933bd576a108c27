# schema.py - server-side validator for the devices collection

devices_schema = {
    "bsonType": "object",
    "required": ["uid", "data", "ip", "type"],
    "properties": {
        "uid": {"bsonType": "string", "minLength": 1},
        "data": {"bsonType": "objectId"},
        "ip": {"bsonType": "string", "minLength": 1},
        "type": {"bsonType": "string", "minLength": 1},
    },
}

# unique index keys per collection
devices_indexes = [
    {"keys": [("uid", 1)], "unique": True},
]

# lower case only, the form str(ObjectId) gives back
OBJECT_ID_PATTERN = r"\A[0-9a-f]{24}\Z"

_JSON_SCHEMA_CACHE: dict = {}


def bson_to_jsonschema(bson_schema: dict) -> dict:
    """Translate a $jsonSchema validator into plain JSON Schema.

    ObjectIds are checked in their 24 hex digit string form, which is what
    callers hand in before the value is converted for storage.
    """
    props = {}
    for key, prop in bson_schema.get("properties", {}).items():
        bsonType = prop.get("bsonType")
        if bsonType == "string":
            prop_schema = {"type": "string"}
        elif bsonType == "objectId":
            prop_schema = {"type": "string", "pattern": OBJECT_ID_PATTERN}
        else:
            raise ValueError(f"Unsupported bsonType for '{key}': {bsonType}")
        if "minLength" in prop:
            prop_schema["minLength"] = prop["minLength"]
        props[key] = prop_schema

    json_schema = {"type": "object", "properties": props}
    if "required" in bson_schema:
        json_schema["required"] = bson_schema["required"]
    return json_schema


def devices_jsonschema() -> dict:
    if "devices" not in _JSON_SCHEMA_CACHE:
        _JSON_SCHEMA_CACHE["devices"] = bson_to_jsonschema(devices_schema)
    return _JSON_SCHEMA_CACHE["devices"]

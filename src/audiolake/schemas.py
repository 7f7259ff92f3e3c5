"""
PyArrow schema definitions for source and normalized audio datasets.

The source layout is the one produced by Hugging Face style audio datasets:
a struct column holding the encoded audio next to scalar metadata columns.
"""

import pyarrow as pa


# Name of the nested column holding the encoded audio
AUDIO_COLUMN = "audio"

# Children of the audio struct, renamed when the struct is flattened
AUDIO_FIELD_RENAMES = {
    "bytes": "audio_bytes",
    "sampling_rate": "audio_sampling_rate",
    "path": "audio_path",
}

AUDIO_BYTES_COLUMN = "audio_bytes"
AUDIO_SAMPLING_RATE_COLUMN = "audio_sampling_rate"
AUDIO_PATH_COLUMN = "audio_path"
DURATION_COLUMN = "duration"
TRANSCRIPTION_COLUMN = "transcription"

# Columns every normalized batch must carry
REQUIRED_NORMALIZED_COLUMNS = (
    AUDIO_BYTES_COLUMN,
    AUDIO_SAMPLING_RATE_COLUMN,
    AUDIO_PATH_COLUMN,
    DURATION_COLUMN,
    TRANSCRIPTION_COLUMN,
)

AUDIO_STRUCT_TYPE = pa.struct([
    pa.field("bytes", pa.binary()),
    pa.field("sampling_rate", pa.int64()),
    pa.field("path", pa.string()),
])

# Source dataset schema (as written by dataset exporters)
SOURCE_SCHEMA = pa.schema([
    pa.field(AUDIO_COLUMN, AUDIO_STRUCT_TYPE),
    pa.field(DURATION_COLUMN, pa.float64()),
    pa.field(TRANSCRIPTION_COLUMN, pa.string()),
])

# Normalized schema (after flattening and renaming the audio struct)
NORMALIZED_SCHEMA = pa.schema([
    pa.field(AUDIO_BYTES_COLUMN, pa.binary()),
    pa.field(AUDIO_SAMPLING_RATE_COLUMN, pa.int64()),
    pa.field(AUDIO_PATH_COLUMN, pa.string()),
    pa.field(DURATION_COLUMN, pa.float64()),
    pa.field(TRANSCRIPTION_COLUMN, pa.string()),
])


def get_schema(schema_type: str) -> pa.Schema:
    """
    Get the PyArrow schema for a dataset layout.

    Args:
        schema_type: "source" or "normalized"

    Raises:
        ValueError: If schema_type is not recognized
    """
    schema_map = {
        "source": SOURCE_SCHEMA,
        "normalized": NORMALIZED_SCHEMA,
    }

    if schema_type not in schema_map:
        raise ValueError(
            f"Unknown schema_type: {schema_type}. "
            f"Valid types: {list(schema_map.keys())}"
        )

    return schema_map[schema_type]

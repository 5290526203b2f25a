from .source_models import FileSourceModel, SourceModel, WebsiteSourceModel
from .vector_record_models import VectorRecordModel

__all__ = [
    "FileSourceModel",
    "SourceModel",
    "VectorRecordModel",
    "WebsiteSourceModel",
]

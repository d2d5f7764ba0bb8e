from .file_store_local import LocalFileStore
from .image_processor import PillowImageProcessor
from .color_quantizer_pillow import PillowColorQuantizer
from .placeholder_source_picsum import PicsumPlaceholderSource
from .clock import SystemClock

__all__ = [
    "LocalFileStore",
    "PillowImageProcessor",
    "PillowColorQuantizer",
    "PicsumPlaceholderSource",
    "SystemClock",
]

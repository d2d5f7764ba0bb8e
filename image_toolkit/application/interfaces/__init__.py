from .file_store import IFileStore
from .placeholder_source import IPlaceholderSource
from .color_quantizer import IColorQuantizer
from .image_processor import IImageProcessor
from .clock import IClock
from .image_adapters import IImagePipelineAdapters

__all__ = [
    "IFileStore",
    "IPlaceholderSource",
    "IColorQuantizer",
    "IImageProcessor",
    "IClock",
    "IImagePipelineAdapters",
]

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .color_quantizer import IColorQuantizer
from .file_store import IFileStore
from .image_processor import IImageProcessor
from .placeholder_source import IPlaceholderSource
from .clock import IClock


@runtime_checkable
class IImagePipelineAdapters(Protocol):
    store: IFileStore
    processor: IImageProcessor
    quantizer: IColorQuantizer
    placeholder_source: IPlaceholderSource
    clock: IClock

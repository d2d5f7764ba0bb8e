from typing import Any, Dict, List

from image_toolkit.application.interfaces import IImagePipelineAdapters
from utils.format_utils import format_file_size
from utils.image_utils import SourceImage

KB = 1024
MB = 1024 * 1024


def optimization_suggestions(source: SourceImage) -> List[str]:
    suggestions = []
    if source.format == "jpeg" and source.size > 500 * KB:
        suggestions.append("Consider converting to WebP format for better compression")
    elif source.format == "png" and not source.has_alpha and source.size > 200 * KB:
        suggestions.append(
            "PNG without transparency can be converted to JPEG or WebP for smaller file size"
        )
    if source.width > 2000:
        suggestions.append(
            f"Image is very large ({source.width}px). Consider resizing to max 1920px for web use"
        )
    if source.size > MB:
        suggestions.append("File size is large. Consider reducing quality or converting format")
    return suggestions


class AnalyzeImageUseCase:
    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters

    async def execute(self, source_path: str) -> Dict[str, Any]:
        data = await self._adapters.store.read_bytes(source_path)
        source = await self._adapters.processor.describe(data)
        suggestions = optimization_suggestions(source)
        return {
            "path": source_path,
            "format": source.format or "unknown",
            "width": source.width,
            "height": source.height,
            "size": source.size,
            "size_formatted": format_file_size(source.size),
            "aspect_ratio": f"{source.width}:{source.height}",
            "has_alpha": source.has_alpha,
            "color_space": source.color_space,
            "channels": source.channels,
            "density": source.density,
            "orientation": source.orientation,
            "is_optimized": not suggestions,
            "optimization_suggestions": suggestions,
        }

import logging
from typing import Any, Dict, Optional

from image_toolkit.application.interfaces import IImagePipelineAdapters
from image_toolkit.core.config import settings
from image_toolkit.core.exceptions import InvalidParameterError
from utils.derived_assets import DEFAULT_BACKGROUND, DEFAULT_TEXT_COLOR, transparent_canvas
from utils.format_utils import resolve_format, with_extension

logger = logging.getLogger(__name__)

PLACEHOLDER_QUALITY = 90


class CreatePlaceholderUseCase:
    """Generate a placeholder image of a fixed size.

    Three sources: a labelled solid rectangle (default), a random photo from
    the placeholder source (`use_image`), or a fully transparent PNG
    (`transparent`, which wins over everything else).
    """

    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters

    async def execute(
        self,
        output_path: str,
        width: int,
        height: int,
        background_color: str = DEFAULT_BACKGROUND,
        text_color: str = DEFAULT_TEXT_COLOR,
        image_format: Optional[str] = None,
        use_image: bool = False,
        image_id: Optional[int] = None,
        blur: Optional[int] = None,
        grayscale: bool = False,
        transparent: bool = False,
    ) -> Dict[str, Any]:
        if width < 1 or height < 1:
            raise InvalidParameterError("Placeholder width and height must be at least 1", "width")
        processor = self._adapters.processor

        if transparent:
            fmt, source = "png", "transparent"
            output_path = with_extension(output_path, fmt)
            image = transparent_canvas(width, height)
        else:
            fmt = resolve_format(output_path, image_format, settings.default_format)
            if use_image:
                source = "remote"
                data = await self._adapters.placeholder_source.fetch(
                    width=width,
                    height=height,
                    image_format=fmt,
                    image_id=image_id,
                    blur=blur,
                    grayscale=grayscale,
                )
                image = await processor.load(data)
            else:
                source = "generated"
                image = await processor.render_placeholder(
                    width, height, background_color, text_color
                )

        encoded = await processor.encode(image, fmt, PLACEHOLDER_QUALITY)
        path = await self._adapters.store.write_bytes(output_path, encoded.data)
        logger.info("Created %s placeholder %s (%dx%d)", source, path, encoded.width, encoded.height)
        return {
            "path": path,
            "format": encoded.format,
            "width": encoded.width,
            "height": encoded.height,
            "source": source,
        }

from __future__ import annotations

import logging

from image_toolkit.application.pipeline.base import BaseStep, PipelineContext
from image_toolkit.core.config import settings
from utils.format_utils import resolve_format, with_extension
from utils.geometry_utils import NoSizing, plan_geometry

logger = logging.getLogger(__name__)

FORMAT_FORCED = "format-forced-png"


class PlanGeometryStep(BaseStep):
    """Resolve sizing and output format into an execution plan.

    Input:  source, transform?, format?, output_path
    Output: plan, format, output_path (extension corrected when the format
            is forced), warnings
    """

    name = "plan_geometry"
    required_keys = ["source"]

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        source = context.get("source")
        transform = context.input.get("transform")
        output_path = context.input.get("output_path")

        if transform is None:
            sizing, circle, requested = NoSizing(), False, None
        else:
            sizing = transform.sizing(
                default_max_width=context.option(
                    "default_max_width", settings.default_max_width
                )
            )
            circle, requested = transform.circle, transform.format

        plan = plan_geometry(source.width, source.height, sizing, circle=circle)
        image_format = resolve_format(
            output_path,
            context.input.get("format") or requested,
            context.option("default_format", settings.default_format),
        )

        warnings = list(plan.warnings)
        if plan.forced_format and plan.forced_format != image_format:
            logger.info(
                "Output format %s overridden to %s", image_format, plan.forced_format
            )
            warnings.append(FORMAT_FORCED)
            image_format = plan.forced_format
        if plan.forced_format and output_path:
            output_path = with_extension(output_path, image_format)

        context.update(
            plan=plan,
            format=image_format,
            output_path=output_path,
            warnings=warnings,
        )

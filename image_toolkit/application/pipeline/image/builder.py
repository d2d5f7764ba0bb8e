from __future__ import annotations

from image_toolkit.application.interfaces import IImagePipelineAdapters
from image_toolkit.application.pipeline.base import Pipeline, make_logging_middleware
from image_toolkit.application.pipeline.factory import PipelineFactory
from image_toolkit.application.pipeline.image.steps.load_source import LoadSourceStep
from image_toolkit.application.pipeline.image.steps.plan_geometry import PlanGeometryStep
from image_toolkit.application.pipeline.image.steps.apply_geometry import ApplyGeometryStep
from image_toolkit.application.pipeline.image.steps.apply_filters import ApplyFiltersStep
from image_toolkit.application.pipeline.image.steps.circle_mask import CircleMaskStep
from image_toolkit.application.pipeline.image.steps.watermark import WatermarkStep
from image_toolkit.application.pipeline.image.steps.encode import EncodeStep
from image_toolkit.application.pipeline.image.steps.save_asset import SaveAssetStep
from image_toolkit.application.pipeline.image.steps.write_sidecar import WriteSidecarStep


def build_image_pipeline_via_container(
    adapters: IImagePipelineAdapters,
    *,
    enable_logging_middleware: bool = True,
    fail_fast: bool = True,
) -> Pipeline:
    """Transform pipeline: geometry, then filters, circle mask and watermark
    in that order, then encode, save and the optional sidecar.

    Stages without a matching request option skip themselves.
    """
    middlewares = [make_logging_middleware()] if enable_logging_middleware else []
    factory = PipelineFactory(middlewares=middlewares, fail_fast=fail_fast)
    factory.extend(
        [
            LoadSourceStep(adapters.store, adapters.processor),
            PlanGeometryStep(),
            ApplyGeometryStep(adapters.processor),
            ApplyFiltersStep(adapters.processor),
            CircleMaskStep(adapters.processor),
            WatermarkStep(adapters.store, adapters.processor),
            EncodeStep(adapters.processor),
            SaveAssetStep(adapters.store),
            WriteSidecarStep(adapters.store, adapters.clock),
        ]
    )
    return factory.build()

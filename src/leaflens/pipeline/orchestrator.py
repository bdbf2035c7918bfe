"""Single-image analysis: decode once, fan out edge and thermogram branches."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any, Protocol

from leaflens.core.grayscale import to_luma
from leaflens.core.scoring import brightness_score, edge_score
from leaflens.core.sobel import gradient, to_image
from leaflens.core.thermogram import colorize
from leaflens.io.codec import ImageCodec, PillowCodec, image_bytes
from leaflens.io.upload import check_upload
from leaflens.models.config import AnalysisConfig
from leaflens.models.grids import LumaGrid
from leaflens.models.results import AnalysisResult

# Seconds between cancellation checks while waiting on branches
_CANCEL_POLL = 0.05


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


class AnalysisCancelled(RuntimeError):
    """The caller cancelled the analysis; no result is produced."""


def codec_for(config: AnalysisConfig) -> PillowCodec:
    return PillowCodec(
        apply_exif_orientation=config.apply_exif_orientation,
        max_pixels=config.max_pixels,
        jpeg_quality=config.jpeg_quality,
    )


def edge_branch(
    luma: LumaGrid, codec: ImageCodec, config: AnalysisConfig
) -> tuple[bytes | str, float]:
    grad = gradient(luma)
    rendered = to_image(grad, invert=config.invert_edges)
    encoded = codec.encode(rendered, config.output_format, config.as_data_uri)
    return encoded, edge_score(grad, gain=config.edge_gain)


def thermogram_branch(
    luma: LumaGrid, codec: ImageCodec, config: AnalysisConfig
) -> tuple[bytes | str, float]:
    thermo = colorize(luma)
    encoded = codec.encode(thermo, config.output_format, config.as_data_uri)
    return encoded, brightness_score(luma)


def _check_cancelled(cancel: CancelToken | None) -> None:
    if cancel is not None and cancel.is_set():
        raise AnalysisCancelled("analysis cancelled")


def _join(futures: Iterable[Future[Any]], cancel: CancelToken | None) -> None:
    """Wait for every future; re-raise the first failure, or stop on cancel."""
    pending = set(futures)
    timeout = _CANCEL_POLL if cancel is not None else None
    while pending:
        done, pending = wait(pending, timeout=timeout, return_when=FIRST_EXCEPTION)
        _check_cancelled(cancel)
        for f in done:
            exc = f.exception()
            if exc is not None:
                raise exc


def analyze(
    image: bytes | str,
    config: AnalysisConfig | None = None,
    *,
    codec: ImageCodec | None = None,
    cancel: CancelToken | None = None,
    side_tasks: Mapping[str, Callable[[bytes | str], Any]] | None = None,
) -> AnalysisResult:
    """Produce the edge map, thermogram and both scores for one encoded image.

    ``image`` is raw encoded bytes or a ``data:`` URI. ``side_tasks`` are
    caller collaborators (e.g. a classifier) run on the same input while the
    pipeline works; their return values land in ``AnalysisResult.extras``
    and their exceptions propagate unchanged.

    Raises DecodeError for unusable input and AnalysisCancelled when
    ``cancel`` is set before every branch has finished.
    """
    config = config or AnalysisConfig()
    codec = codec or codec_for(config)
    tasks = dict(side_tasks or {})

    raw = image_bytes(image)
    if config.max_upload_bytes is not None or config.allowed_formats is not None:
        check_upload(raw, config)
    _check_cancelled(cancel)

    executor = ThreadPoolExecutor(max_workers=2 + len(tasks), thread_name_prefix="leaflens")
    try:
        side: dict[str, Future[Any]] = {
            name: executor.submit(fn, image) for name, fn in tasks.items()
        }

        grid = codec.decode(raw)
        luma = to_luma(grid)
        _check_cancelled(cancel)

        edge_future = executor.submit(edge_branch, luma, codec, config)
        thermo_future = executor.submit(thermogram_branch, luma, codec, config)
        _join([edge_future, thermo_future, *side.values()], cancel)

        edge_image, e_score = edge_future.result()
        thermogram_image, b_score = thermo_future.result()
        extras = {name: fut.result() for name, fut in side.items()}
    except BaseException:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)

    return AnalysisResult(
        edge_image=edge_image,
        thermogram_image=thermogram_image,
        edge_score=e_score,
        brightness_score=b_score,
        width=grid.width,
        height=grid.height,
        extras=extras,
    )

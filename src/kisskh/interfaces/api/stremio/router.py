"""Stremio addon API endpoints (manifest, stream, subtitles)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from kisskh.domain.entities.stremio import (
    StremioContentType,
    StremioRequest,
    StremioStream,
    SubtitleTrack,
)
from kisskh.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["stremio"])

_ADDON_ID = "community.kisskh.unified"
_ADDON_VERSION = "7.3.0"

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
}


def _build_manifest() -> dict[str, Any]:
    """Build the Stremio addon manifest."""
    return {
        "id": _ADDON_ID,
        "version": _ADDON_VERSION,
        "name": "KissKH Videos + Spanish Subs",
        "description": "Videos and Spanish subtitles from KissKH",
        "resources": ["stream", "subtitles"],
        "types": ["series", "movie"],
        "idPrefixes": ["tt"],
        "catalogs": [],
    }


def parse_stremio_id(content_type: str, raw_id: str) -> StremioRequest | None:
    """Parse a Stremio ID into a StremioRequest.

    Movies: "tt1234567" (season 1, episode 1)
    Series: "tt1234567:1:5" (season 1, episode 5); a bare series ID also
    maps to episode 1. IDs with any other number of parts are rejected.
    """
    if content_type not in ("movie", "series"):
        return None

    ct: StremioContentType = cast(StremioContentType, content_type)

    if not raw_id.startswith("tt"):
        return None

    parts = raw_id.split(":")
    if len(parts) not in (1, 3):
        return None
    imdb_id = parts[0]

    if ct == "series" and len(parts) == 3:
        try:
            season = int(parts[1])
            episode = int(parts[2])
        except ValueError:
            return None
        if episode < 1:
            return None
        return StremioRequest(
            imdb_id=imdb_id,
            content_type=ct,
            season=season,
            episode=episode,
        )

    return StremioRequest(imdb_id=imdb_id, content_type=ct)


def _format_stream(stream: StremioStream) -> dict[str, str]:
    return {"url": stream.url, "title": stream.title}


def _format_subtitle(track: SubtitleTrack) -> dict[str, str]:
    return {
        "id": track.id,
        "url": track.url,
        "lang": track.language_code,
        "label": track.label,
    }


@router.get("/manifest.json")
async def stremio_manifest() -> JSONResponse:
    """Serve the Stremio addon manifest."""
    return JSONResponse(content=_build_manifest(), headers=_CORS_HEADERS)


@router.get("/stream/{content_type}/{stremio_id}.json")
async def stremio_stream(
    request: Request,
    content_type: str,
    stremio_id: str,
) -> JSONResponse:
    """Resolve the direct KissKH video for a movie or episode."""
    state = cast(AppState, request.app.state)

    parsed = parse_stremio_id(content_type, stremio_id)
    if parsed is None:
        return JSONResponse(content={"streams": []}, headers=_CORS_HEADERS)

    log.info(
        "stremio_stream_request",
        imdb_id=parsed.imdb_id,
        content_type=parsed.content_type,
        season=parsed.season,
        episode=parsed.episode,
    )

    try:
        streams = await state.stremio_stream_uc.execute(parsed)
    except Exception:
        log.warning("stremio_stream_handler_failed", id=stremio_id, exc_info=True)
        streams = []

    return JSONResponse(
        content={"streams": [_format_stream(s) for s in streams]},
        headers=_CORS_HEADERS,
    )


async def _subtitles_response(
    request: Request, content_type: str, stremio_id: str
) -> JSONResponse:
    state = cast(AppState, request.app.state)

    parsed = parse_stremio_id(content_type, stremio_id)
    if parsed is None:
        return JSONResponse(content={"subtitles": []}, headers=_CORS_HEADERS)

    log.info(
        "stremio_subtitles_request",
        imdb_id=parsed.imdb_id,
        content_type=parsed.content_type,
        season=parsed.season,
        episode=parsed.episode,
    )

    try:
        tracks = await state.stremio_subtitles_uc.execute(parsed)
    except Exception:
        log.warning("stremio_subtitles_handler_failed", id=stremio_id, exc_info=True)
        tracks = []

    return JSONResponse(
        content={"subtitles": [_format_subtitle(t) for t in tracks]},
        headers=_CORS_HEADERS,
    )


@router.get("/subtitles/{content_type}/{stremio_id}.json")
async def stremio_subtitles(
    request: Request,
    content_type: str,
    stremio_id: str,
) -> JSONResponse:
    """Resolve the Spanish subtitle tracks for a movie or episode."""
    return await _subtitles_response(request, content_type, stremio_id)


@router.get("/subtitles/{content_type}/{stremio_id}/{extra}.json")
async def stremio_subtitles_extra(
    request: Request,
    content_type: str,
    stremio_id: str,
    extra: str,
) -> JSONResponse:
    """Same as stremio_subtitles; Stremio's extra args (hash, size) are ignored."""
    return await _subtitles_response(request, content_type, stremio_id)

"""Stateless truncation endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request

from showmore.content.truncator import truncate
from showmore.core.models import TruncateRequest
from showmore.web.deps import clean_options, get_config
from showmore.web.sanitize import prepare_content

router = APIRouter()


@router.post("/api/truncate")
async def truncate_content(payload: TruncateRequest, request: Request):
    cfg = get_config(request)
    content = prepare_content(payload.content, cfg.render.markdown, cfg.render.sanitize)
    options = cfg.more.merge(clean_options(payload.options))
    return truncate(content, options).model_dump()

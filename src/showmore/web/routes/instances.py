"""Instance routes: attach, toggle, reconfigure, detach."""

from __future__ import annotations

import logging
import secrets
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from showmore.core.models import AttachRequest, CommandRequest, MoreOptions, RenderInstruction
from showmore.delivery.templates import render_more
from showmore.web.deps import clean_options, get_config, get_controller, options_payload
from showmore.web.sanitize import prepare_content

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(handle: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": f"Instance {handle} is not attached"})


def _view_payload(view: RenderInstruction) -> dict:
    data = view.model_dump(mode="json")
    data["html"] = render_more(view)
    return data


def _change_logger(handle: str):
    def on_change(expanding: bool) -> None:
        logger.info("Instance %s %s", handle, "expanded" if expanding else "collapsed")
    return on_change


def _command_payload(result: Any) -> Any:
    if isinstance(result, RenderInstruction):
        return _view_payload(result)
    if isinstance(result, MoreOptions):
        return options_payload(result)
    if isinstance(result, frozenset):
        return {"value": sorted(result)}
    return {"value": result}


@router.post("", status_code=201)
async def attach(payload: AttachRequest, request: Request):
    cfg = get_config(request)
    controller = get_controller(request)
    handle = payload.handle or secrets.token_urlsafe(8)
    content = prepare_content(payload.content, cfg.render.markdown, cfg.render.sanitize)
    options = {**clean_options(payload.options), "on_change": _change_logger(handle)}
    view = controller.attach(handle, content, options)
    return _view_payload(view)


@router.get("/{handle}")
async def show(handle: str, request: Request):
    view = get_controller(request).render(handle)
    if view is None:
        return _not_found(handle)
    return _view_payload(view)


@router.patch("/{handle}")
async def reconfigure(handle: str, options: dict[str, Any], request: Request):
    view = get_controller(request).reconfigure(handle, clean_options(options))
    if view is None:
        return _not_found(handle)
    return _view_payload(view)


@router.post("/{handle}/toggle")
async def toggle(handle: str, request: Request):
    controller = get_controller(request)
    if not controller.is_attached(handle):
        return _not_found(handle)
    view = controller.toggle(handle)
    if view is None:
        # Nothing to toggle: report the unchanged view
        return {"toggled": False, **_view_payload(controller.render(handle))}
    return {"toggled": True, **_view_payload(view)}


@router.get("/{handle}/options")
async def get_options(handle: str, request: Request, key: Optional[str] = None):
    controller = get_controller(request)
    if not controller.is_attached(handle):
        return _not_found(handle)
    if key is None:
        return options_payload(controller.get_options(handle))
    if MoreOptions.field_for(key) in (None, "on_change"):
        return JSONResponse(status_code=400, content={"error": f"Unknown option: {key}"})
    return _command_payload(controller.get_options(handle, key))


@router.delete("/{handle}")
async def detach(handle: str, request: Request):
    content = get_controller(request).detach(handle)
    if content is None:
        return _not_found(handle)
    return {"content": content}


@router.post("/{handle}/commands/{name}")
async def run_command(handle: str, name: str, request: Request, payload: Optional[CommandRequest] = None):
    cfg = get_config(request)
    controller = get_controller(request)
    args = list(payload.args) if payload else []
    if args and isinstance(args[-1], dict):
        args[-1] = clean_options(args[-1])

    if name == "attach" and args:
        if not isinstance(args[0], str):
            return JSONResponse(status_code=400, content={"error": "Content must be a string"})
        content = prepare_content(args[0], cfg.render.markdown, cfg.render.sanitize)
        options = args[1] if len(args) > 1 and isinstance(args[1], dict) else {}
        args = [content, {**options, "on_change": _change_logger(handle)}]

    if name == "settings" and args and (not isinstance(args[0], str) or MoreOptions.field_for(args[0]) in (None, "on_change")):
        return JSONResponse(status_code=400, content={"error": f"Unknown option: {args[0]}"})
    result = controller.command(name, handle, *args)
    if name == "toggle" and controller.is_attached(handle):
        if result is None:
            return {"toggled": False, **_view_payload(controller.render(handle))}
        return {"toggled": True, **_view_payload(result)}
    if result is None:
        return _not_found(handle)
    if isinstance(result, str) and name == "destroy":
        return {"content": result}
    return _command_payload(result)

"""FastAPI application: Kakao skill webhook, PDF upload, admin form."""

from __future__ import annotations

import hmac
import logging

from fastapi import BackgroundTasks, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from hr_rag.agent.generator import BUSY_FALLBACK
from hr_rag.agent.graph import create_initial_state
from hr_rag.config import Settings, settings
from hr_rag.errors import AuthError, UploadTooLargeError, ValidationError
from hr_rag.serving.kakao import (
    APOLOGY_TEXT,
    EMPTY_UTTERANCE_TEXT,
    GET_ACK_TEXT,
    QUICK_REPLIES,
    parse_skill_request,
    skill_text,
)
from hr_rag.serving.services import ChatbotServices, get_services

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="HR RAG Chatbot",
    version="0.1.0",
    description="Kakao skill webhook answering HR / labor-law questions from uploaded documents.",
)

DEFAULT_SOURCE = "기타"
DEFAULT_TITLE = "문서"

ADMIN_FORM = """
<h3>PDF 업로드(관리자)</h3>
<form action="/upload" method="post" enctype="multipart/form-data">
  <p><input type="password" name="pw" placeholder="ADMIN_PASSWORD" /></p>
  <p><input type="text" name="source" placeholder="문서출처(예: 회사취업규칙/근로기준법)" /></p>
  <p><input type="text" name="title" placeholder="문서제목(파일명)" /></p>
  <p><input type="file" name="file" accept="application/pdf" /></p>
  <button>업로드</button>
</form>
"""

FORBIDDEN = {"error": "forbidden"}


# ── Helpers ───────────────────────────────────────────────────────────
def _secret_ok(request: Request, secret: str) -> bool:
    """Check ``x-skill-secret`` (or ``?secret=``) when a secret is configured."""
    if not secret:
        return True
    token = request.headers.get("x-skill-secret") or request.query_params.get("secret") or ""
    return hmac.compare_digest(token.encode(), secret.encode())


def _check_admin(pw: str, config: Settings) -> None:
    config.require("admin_password")
    if not hmac.compare_digest(pw.encode(), config.admin_password.encode()):
        raise AuthError("비밀번호 오류")


def _read_upload(file: UploadFile | None, max_bytes: int) -> bytes:
    data = file.file.read(max_bytes + 1) if file is not None else b""
    if not data:
        raise ValidationError("파일이 없습니다.")
    if len(data) > max_bytes:
        raise UploadTooLargeError(f"파일이 너무 큽니다. (최대 {max_bytes // (1024 * 1024)}MB)")
    return data


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "OK - kakao-rag-bot"


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.get("/ready")
def ready(services: ChatbotServices = Depends(get_services)):
    """Readiness probe: the document store answers a heartbeat."""
    try:
        ok = services.store.health_check()
    except Exception:
        logger.warning("Document store unavailable", exc_info=True)
        ok = False
    if not ok:
        return JSONResponse({"status": "unavailable"}, status_code=503)
    return {"status": "ready"}


@app.get("/admin", response_class=HTMLResponse)
async def admin_form() -> str:
    """Static upload form for administrators."""
    return ADMIN_FORM


@app.post("/upload", response_class=PlainTextResponse)
def upload(
    pw: str = Form(""),
    source: str = Form(""),
    title: str = Form(""),
    file: UploadFile | None = File(None),
    services: ChatbotServices = Depends(get_services),
) -> PlainTextResponse:
    """Index an uploaded PDF: extract → chunk → embed → bulk insert."""
    try:
        _check_admin(pw, services.settings)
        data = _read_upload(file, services.settings.max_upload_bytes)
        count = services.indexer.index_pdf(
            data,
            source=source.strip() or DEFAULT_SOURCE,
            title=title.strip() or DEFAULT_TITLE,
        )
    except AuthError as exc:
        return PlainTextResponse(str(exc), status_code=403)
    except UploadTooLargeError as exc:
        return PlainTextResponse(str(exc), status_code=413)
    except ValidationError as exc:
        return PlainTextResponse(str(exc), status_code=400)
    except Exception as exc:
        logger.exception("Upload failed")
        return PlainTextResponse(f"업로드 실패: {exc}", status_code=500)

    return PlainTextResponse(f"업로드/인덱싱 완료! ({count}개 청크)")


@app.get("/kakao/ping")
async def kakao_ping() -> dict:
    return skill_text("pong")


@app.get("/kakao")
async def kakao_ack(request: Request, services: ChatbotServices = Depends(get_services)):
    """Static acknowledgement for connectivity checks."""
    if "fast" in request.query_params:
        return skill_text("pong(fast-debug)")
    if not _secret_ok(request, services.settings.kakao_skill_secret):
        return JSONResponse(FORBIDDEN, status_code=403)
    return skill_text(GET_ACK_TEXT)


@app.post("/kakao")
async def kakao_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    services: ChatbotServices = Depends(get_services),
):
    """Answer one skill request.

    ``?fast`` skips everything, including the secret check, and returns a
    canned reply for connection tests.  Every failure after verification
    still produces an HTTP 200 skill response, because the platform shows
    nothing to the user otherwise.
    """
    if "fast" in request.query_params:
        return skill_text("pong(fast-debug)")
    if not _secret_ok(request, services.settings.kakao_skill_secret):
        logger.warning("Rejected webhook call with bad skill secret")
        return JSONResponse(FORBIDDEN, status_code=403)

    payload = parse_skill_request(await request.body())
    if not payload.utterance:
        return skill_text(EMPTY_UTTERANCE_TEXT, QUICK_REPLIES)

    try:
        result = await services.graph.ainvoke(create_initial_state(payload.utterance, payload.user_id))
    except Exception:
        logger.exception("Webhook answer failed")
        return skill_text(APOLOGY_TEXT)

    answer = result["answer"]
    if answer != BUSY_FALLBACK:
        try:
            background_tasks.add_task(services.memory.remember, payload.user_id, payload.utterance, answer)
        except Exception:
            logger.warning("Could not schedule qa_memory write", exc_info=True)

    return skill_text(answer, QUICK_REPLIES, max_chars=services.settings.reply_max_chars)

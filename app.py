from typing import Annotated

from fastapi import Depends, FastAPI, Header
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

from conversation_state import SessionStore
from logger import get_logger, uvicorn_log_config
from rag_query_pipeline import EmptyQueryError, RagPipeline, UpstreamServiceError, get_pipeline
from schema import ChatMessage, ErrorResponse
from settings import settings
from system_messages import generic_error_message

logger = get_logger(__name__)

app = FastAPI(
    title = "RateMyProfAI",
    description = "Streaming RAG chat over professor reviews",
    version = "0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins = settings.CORS_ORIGINS,
    allow_credentials = True,
    allow_methods = ['*'],
    allow_headers = ['*']
)

session_store = SessionStore()


def get_session_store() -> SessionStore:
    return session_store


@app.get("/health")
def health_check():
    return {
        "status": "ok"
    }

@app.post("/api/chat", responses = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def chat(
    messages: list[ChatMessage],
    x_session_id: Annotated[str | None, Header()] = None,
    pipeline: RagPipeline = Depends(get_pipeline),
    sessions: SessionStore = Depends(get_session_store),
):
    state = sessions.get(x_session_id)

    try:
        chunks = pipeline.prepare(messages, state)
    except EmptyQueryError as exc:
        return JSONResponse({"error": str(exc)}, status_code = 400)
    except UpstreamServiceError as exc:
        return JSONResponse({"error": str(exc)}, status_code = 500)
    except Exception:
        logger.exception("Chat request failed")
        return JSONResponse({"error": generic_error_message}, status_code = 500)

    return StreamingResponse(
        chunks,
        media_type = "text/plain; charset=utf-8"
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host = "0.0.0.0", port = 8000, log_config = uvicorn_log_config())

from fastapi import FastAPI, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from typing import Callable
import logging

from config import Settings, load_settings
from schemas import *
from dictation import compare_dictation, make_hint, summarize_session
from answer_checker import check_answer

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


settings = load_settings()
setup_logging(settings.log_level)

app = FastAPI(title="Listening App Dictation Service", version="0.2.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_settings() -> Settings:
    return settings


ProgressRecorder = Callable[[DictationSubmit, ProgressRecord], None]


def log_progress(payload: DictationSubmit, record: ProgressRecord) -> None:
    # Results are stored by the progress API; here we only leave a trace.
    logger.info(
        "Progress for user=%s task=%s sentence=%s: correct=%s accuracy=%.2f",
        payload.user_id, payload.task_id, payload.sentence_id,
        record.is_correct, record.accuracy,
    )


def get_progress_recorder() -> ProgressRecorder:
    return log_progress


# -----------------------------
#  🔍 COMPARE DICTATION
# -----------------------------
@app.post("/dictation/compare", response_model=DictationResult)
def dictation_compare(req: DictationCompare, cfg: Settings = Depends(get_settings)):
    options = cfg.dictation_options(req.strict_case, req.strict_punctuation)
    return compare_dictation(req.text, req.expected, options)


# -----------------------------
#  📝 SUBMIT DICTATION
# -----------------------------
@app.post("/submit/dictation", response_model=DictationSubmitOut)
def submit_dictation(
    payload: DictationSubmit,
    cfg: Settings = Depends(get_settings),
    record_progress: ProgressRecorder = Depends(get_progress_recorder),
):
    result = compare_dictation(payload.text, payload.expected, cfg.dictation_options())

    recorded = True
    try:
        record_progress(payload, result.to_progress())
    except Exception:
        # the comparison stands even if the progress API is down
        logger.exception("Failed to record progress for user %s", payload.user_id)
        recorded = False

    return DictationSubmitOut(result=result, recorded=recorded)


# -----------------------------
#  💡 HINT
# -----------------------------
@app.get("/dictation/hint", response_model=HintOut)
def dictation_hint(expected: str):
    if not expected.strip():
        raise HTTPException(400, "Expected sentence is required.")
    return HintOut(hint=make_hint(expected))


# -----------------------------
#  📊 SESSION SUMMARY
# -----------------------------
@app.post("/dictation/summary", response_model=DictationSummary)
def dictation_summary(req: SummaryRequest):
    return summarize_session(req.results)


# -----------------------------
#  🎤 CHECK SPOKEN ANSWER
# -----------------------------
@app.post("/answers/check", response_model=AnswerCheckResult)
def answers_check(req: AnswerCheck, cfg: Settings = Depends(get_settings)):
    threshold = cfg.answer_threshold if req.threshold is None else req.threshold
    return check_answer(req.text, req.expected, threshold)


# ============================
# 🏠 Home (root) endpoint
# ============================
@app.get("/")
def home():
    return {
        "status": "Backend running",
        "version": app.version,
        "message": "LinguaListen dictation service is working normally."
    }

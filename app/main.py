from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import Response

from .batch import BatchRunner, parse_url_list
from .config import settings
from .export import results_to_csv, safe_filename
from .generator import OpenAIMetaTagGenerator
from .logger import setup_logging
from .reader import ReaderClient
from .schemas import BatchOutcome, ExportRequest, GenerateBatchRequest

setup_logging()

app = FastAPI(title="MetaGenius")


@lru_cache
def get_runner() -> BatchRunner:
    return BatchRunner(ReaderClient(settings), OpenAIMetaTagGenerator(settings), settings)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/generate", response_model=BatchOutcome)
def generate_meta_tags(req: GenerateBatchRequest, runner: BatchRunner = Depends(get_runner)):
    if isinstance(req.urls, str):
        urls = parse_url_list(req.urls)
    else:
        urls = parse_url_list("\n".join(req.urls))
    try:
        return runner.run(urls, req.title_example, req.description_example)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/export")
def export_csv(req: ExportRequest):
    filename = safe_filename(req.filename)
    return Response(
        content=results_to_csv(req.results),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

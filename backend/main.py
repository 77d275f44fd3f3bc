import asyncio
import json
import logging
import random
from pathlib import Path
from typing import List

import config

from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse, FileResponse, Response
from fastapi.middleware.cors import CORSMiddleware

from models import ScrapingRequest, ScrapingProgress, CompanyData, StopResponse, ExportRequest
from services.scraper import scrape_company_data, is_reachable
from services.discovery import generate_urls_from_query
from services import export

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="Company Data Scraper")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def sse(payload: dict) -> str:
    return f"data: {json.dumps(payload)}\n\n"

async def resolve_urls(request: ScrapingRequest) -> List[str]:
    if request.type == "query":
        urls = await generate_urls_from_query(request.query)
    else:
        urls = list(request.urls)
    return urls[:request.options.max_results]

@app.post("/api/scrape")
async def scrape_endpoint(request: ScrapingRequest):
    """
    Visits each URL in turn and streams events:
    "progress" after every step, then one "complete" with all results,
    or a single "error" if the run itself fails.
    """
    options = request.options

    async def event_generator():
        progress = ScrapingProgress()
        try:
            urls = await resolve_urls(request)

            progress.total_urls = len(urls)
            progress.status = "running"
            yield sse({"type": "progress", "progress": progress.model_dump()})

            results: List[CompanyData] = []

            for i, url in enumerate(urls):
                progress.current_url = url
                progress.processed_urls = i + 1
                yield sse({"type": "progress", "progress": progress.model_dump()})

                try:
                    await asyncio.sleep(random.uniform(config.SCRAPE_DELAY_MIN, config.SCRAPE_DELAY_MAX))

                    if options.check_reachability and not await is_reachable(url, options.timeout):
                        logger.warning("Skipping unreachable URL: %s", url)
                        company = None
                    else:
                        company = await scrape_company_data(url, options.extraction_level, options.timeout)

                    if company:
                        results.append(company)
                        progress.successful_extractions += 1
                    else:
                        progress.errors += 1
                except Exception as e:
                    logger.error("Error scraping %s: %s", url, e)
                    progress.errors += 1

                yield sse({"type": "progress", "progress": progress.model_dump()})

            progress.status = "completed"
            progress.current_url = ""
            logger.info(
                "Scrape completed: %d/%d extracted, %d errors",
                progress.successful_extractions, progress.total_urls, progress.errors,
            )
            yield sse({
                "type": "complete",
                "results": [c.to_dict() for c in results],
                "progress": progress.model_dump(),
            })

        except Exception as e:
            logger.exception("Scraping error")
            progress.status = "error"
            yield sse({"type": "error", "error": str(e) or "Unknown error occurred", "progress": progress.model_dump()})

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )

@app.post("/api/scrape/stop", response_model=StopResponse)
async def stop_endpoint():
    # Nothing is wired to the running loop; a started scrape runs to completion.
    logger.info("Stop requested")
    return StopResponse(success=True, message="Scraping stopped")

def _prepare(request: ExportRequest, apply_filter: bool = True) -> List[CompanyData]:
    results = export.filter_results(request.results, request.filter) if apply_filter else request.results
    try:
        return export.sort_results(results, request.sort_by)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.post("/api/results")
def results_endpoint(request: ExportRequest):
    """Filtered and sorted view of a result list held by the client."""
    return [c.to_dict() for c in _prepare(request)]

@app.post("/api/export/{format}")
def export_endpoint(format: str, request: ExportRequest):
    """
    Export the client's full result list as CSV or JSON. The table filter is ignored.
    """
    if format not in ("json", "csv"):
        raise HTTPException(status_code=400, detail="Invalid format")

    results = _prepare(request, apply_filter=False)
    if not results:
        raise HTTPException(status_code=400, detail="No data to export")

    if format == "json":
        body, media_type = export.to_json(results), "application/json"
    else:
        body, media_type = export.to_csv(results), "text/csv"

    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={export.export_filename(format)}"},
    )

@app.get("/health")
def health():
    return {"status": "healthy"}

@app.get("/")
def index():
    return FileResponse(STATIC_DIR / "index.html")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)

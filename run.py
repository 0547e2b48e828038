import logging

import uvicorn

# Setup basic logging for run.py
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

def run():
    logger.info("Starting Recipe Scaler API (Uvicorn)...")
    logger.info("   API:  http://localhost:8000")
    logger.info("   Docs: http://localhost:8000/docs")
    uvicorn.run("recipe_scaler.main:app", host="127.0.0.1", port=8000, reload=True)

if __name__ == "__main__":
    run()

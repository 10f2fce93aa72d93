"""Job application tracker: JSON API over the jobs table."""
from dotenv import load_dotenv
from flask import Flask

from config import settings
from core.logger import logger, setup_logger
from database.db import init_db
from database.seed_data import seed_database
from routes import register_all_routes

# Load environment variables
load_dotenv()

# Setup logging
setup_logger(log_level=settings.log_level)

# Initialize database
init_db()

# Seed example jobs into an empty database when enabled
if settings.seed_demo_data and not settings.is_production:
    seed_database()

app = Flask(__name__)
app.json.sort_keys = False

register_all_routes(app)


if __name__ == '__main__':
    logger.info("Starting Flask application")
    app.run(debug=settings.debug, host=settings.host, port=settings.port)

"""
Serverless entry point for the CivicDesk API
"""
import os

# Serverless hosts have a read-only filesystem and no inotify
os.environ.setdefault("ENVIRONMENT", "production")
os.environ.setdefault("WATCH_DEPARTMENT_CONFIG", "false")

from mangum import Mangum

from civicdesk.main import app

# The lifespan initializes the database and department table on cold start
handler = Mangum(app, lifespan="auto")

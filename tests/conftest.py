import os

os.environ.setdefault('CAREERSCRAPER_DISABLE_FILE_LOGS', '1')
os.environ.setdefault('CAREERSCRAPER_DISABLE_EVENTS', '1')

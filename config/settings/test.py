"""
Test settings for the LCDB content backend.
"""

from .base import *

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

STORAGES['staticfiles'] = {
    'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

# Run Celery tasks inline
CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {
    'translate': '1000/minute',
    'burst': '1000/minute',
}

# Outbound integrations stay off unless a test opts in
WEBHOOKS_PRODUCTION = False
FORCE_WEBHOOKS = False
GITHUB_DISPATCH_TOKEN = ''
DEEPL_API_KEY = 'test-deepl-key'
DEEPL_API_URL = 'https://api.deepl.test/v2/translate'

LOGGING['root']['level'] = 'WARNING'
LOGGING['loggers']['apps']['level'] = 'DEBUG'
LOGGING['loggers']['apps']['propagate'] = True

"""
Django settings for the Scrapman test suite.
"""

SECRET_KEY = 'scrapman-tests-not-secret'

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.messages',
    'django.contrib.sessions',
    'scrapman',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

USE_TZ = True
TIME_ZONE = 'Europe/Bucharest'
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

SCRAPMAN = {
    'LEDGER_BACKEND': 'scrapman.adapters.orm.DjangoLedgerBackend',
    'NEGLIGIBLE_QUANTITY': '0.001',
    'QUANTITY_DECIMAL_PLACES': 2,
    'INSERT_BATCH_SIZE': 100,
    'PARALLEL_READS': False,
}

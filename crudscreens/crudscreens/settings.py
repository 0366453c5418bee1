"""
Django settings for crudscreens project.

For more information on this file, see
https://docs.djangoproject.com/en/stable/topics/settings/

For the full list of settings and their values, see
https://docs.djangoproject.com/en/stable/ref/settings/
"""

# Build paths inside the project like this: os.path.join(BASE_DIR, ...)
import os
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# ----------------------------------------------------------------------

import configparser

import pytz

AGENT = 'crudscreens'

# Settings are read from conf/crudscreens.cfg in the source tree and
# then from /etc/crudscreens/. Settings in /etc/crudscreens/local.cfg
# override all others.
CONFIG_FILES = [
    os.path.join(os.path.dirname(BASE_DIR), 'conf', 'crudscreens.cfg'),
    '/etc/crudscreens/crudscreens.cfg',
    '/etc/crudscreens/local.cfg',
]
if os.environ.get('CRUDSCREENS_CONFIG'):
    CONFIG_FILES.append(os.environ['CRUDSCREENS_CONFIG'])

CONFIG = configparser.ConfigParser()
CONFIG.read_dict({
    'local': {
        'debug': '0',
        'secret_key': 'crudscreens-insecure-change-me',
        'language_code': 'en-us',
        'time_zone': 'America/Los_Angeles',
        'allowed_hosts': 'localhost, 127.0.0.1, testserver',
        'log_level': 'INFO',
        'log_file': '',
        'static_url': '/static/',
    },
})
CONFIG_FILES_READ = CONFIG.read(CONFIG_FILES)

DEBUG                = CONFIG.getboolean('local', 'debug')
SECRET_KEY           = CONFIG.get('local', 'secret_key')
LANGUAGE_CODE        = CONFIG.get('local', 'language_code')
TIME_ZONE            = CONFIG.get('local', 'time_zone')
LOG_LEVEL            = CONFIG.get('local', 'log_level')
LOG_FILE             = CONFIG.get('local', 'log_file')
STATIC_URL           = CONFIG.get('local', 'static_url')

# Local timezone for timestamp fields
TZ = pytz.timezone(TIME_ZONE)

# Hosts/domain names that are valid for this site; required if DEBUG is False
ALLOWED_HOSTS = [
    host.strip()
    for host in CONFIG.get('local', 'allowed_hosts').split(',')
    if host.strip()
]

# ----------------------------------------------------------------------

INSTALLED_APPS = (
    'django.contrib.messages',
    'django.contrib.staticfiles',
    #
    'crudscreens',
    'crud.apps.CrudConfig',
    'demo',
)

# Items live in stores supplied by CrudController subclasses.
DATABASES = {}

MESSAGE_STORAGE = 'django.contrib.messages.storage.cookie.CookieStorage'

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)-8s [%(module)s.%(funcName)s]  %(message)s'
        },
        'simple': {
            'format': '%(asctime)s %(levelname)-8s %(message)s'
        },
    },
    'filters': {
        'suppress_res_requests': {
            '()': 'crud.log.SuppressResourceRequests'
        },
    },
    'handlers': {
        'null': {
            'level': 'DEBUG',
            'class': 'logging.NullHandler',
        },
        'console':{
            'level': LOG_LEVEL,
            'class': 'logging.StreamHandler',
            'filters': ['suppress_res_requests'],
            'formatter': 'simple',
        },
    },
    'loggers': {
        'django.server': {
            'level': 'INFO',
            'propagate': False,
            'handlers': ['console'],
        },
    },
    'root': {
        'level': LOG_LEVEL,
        'handlers': ['console'],
    },
}
if LOG_FILE:
    LOGGING['handlers']['file'] = {
        'level': LOG_LEVEL,
        'class': 'logging.handlers.TimedRotatingFileHandler',
        'filename': LOG_FILE,
        'when': 'D',
        'backupCount': 14,
        'filters': ['suppress_res_requests'],
        'formatter': 'verbose',
    }
    LOGGING['root']['handlers'].append('file')
    LOGGING['loggers']['django.server']['handlers'].append('file')

USE_TZ = True
USE_I18N = True

STATICFILES_FINDERS = (
    'django.contrib.staticfiles.finders.FileSystemFinder',
    'django.contrib.staticfiles.finders.AppDirectoriesFinder',
)

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.messages.context_processors.messages',
                'crud.context_processors.sitewide',
            ],
        },
    },
]

MIDDLEWARE = (
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
)

TEST_RUNNER = 'django.test.runner.DiscoverRunner'

ROOT_URLCONF = 'crudscreens.urls'

WSGI_APPLICATION = 'crudscreens.wsgi.application'

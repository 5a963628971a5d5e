#!/usr/bin/env python
"""
Test runner script for the organizer apps
Usage: python run_tests.py [app_label ...]
"""
import os
import sys
import django
from django.conf import settings
from django.test.utils import get_runner

DEFAULT_LABELS = [
    'organizer.core',
    'organizer.organization',
    'organizer.locations',
    'organizer.tasks',
    'organizer.inventory',
    'organizer.ai',
]

if __name__ == "__main__":
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'organizer.config.settings')
    django.setup()
    TestRunner = get_runner(settings)
    test_runner = TestRunner(verbosity=2)
    failures = test_runner.run_tests(sys.argv[1:] or DEFAULT_LABELS)
    sys.exit(bool(failures))

"""
Test suite for the PetClinic load-test harness.

This package contains:
- unit/: configuration, fixtures, classifier, scenarios, driver and
  threshold-gate tests using fakes in place of Locust's runtime
- integration/: one full iteration through a real Locust ``HttpSession``
  against a Flask stub of the PetClinic API
"""

"""
Feature modules for the All Access Artist backend.

auth (JWT validation and the subscription access gate), ratelimit,
billing (Stripe reconciliation), onboarding, profile and releases.
Routes depend on the protocols in each module's interfaces.py; the
concrete classes are wired in api.dependencies.
"""

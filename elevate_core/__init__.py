"""Elevate Core: job-board backend (accounts, sessions, companies, jobs, applications)."""

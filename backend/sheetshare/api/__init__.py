# @TASK P4-T4.1 - API 패키지 초기화

"""SheetShare REST API package.

Sub-modules expose FastAPI routers:
- notes: song catalog listing and detail
- lookups: tag and time-signature lists
"""

"""
Test suite for tasklist.

Demonstrates unit-testing technique over small application logic:
- Isolation: every collaborator (HTTP, Redis) replaced at its boundary
- Mocking: httpx.MockTransport, unittest.mock.AsyncMock, in-memory fakes
- Async assertions: awaited calls, awaited results
- Behaviour over mechanism: we test our rules, not Pydantic's validation
"""

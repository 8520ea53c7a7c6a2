"""
Document submission client package.

The client submits signed introduce-goods documents, enforcing:
- Quota: a fixed-window rate gate shared by all callers
- Authentication: a lazily refreshed bearer credential, one refresh at a time
- Classification: every completed response becomes an outcome value

Structure:
- app.client: Public client wiring gate, credentials and transport.
- app.adapters: HTTP wrappers for the identity and documents endpoints.
- app.auth: Credential lifecycle.
- app.ratelimit: Fixed-window admission gate.
- app.submission: Pipeline, response classifier and outcomes.
- app.main: Demo entry point.
"""

"""
Domain core: pure logic shared by services, API and client.

Exports:
  - exceptions: Error taxonomy and classification
  - impact, gamification: Arithmetic for coins, CO2 and levels
  - detection: Simulated classifier
  - rate_limiter, retry, security: Request plumbing helpers
"""

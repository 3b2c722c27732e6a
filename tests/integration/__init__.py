"""
Route-level tests for the TaskFlow frontend.

Tests use the Flask test client with the fake TaskFlow API patched in
place of ``requests.request`` and demonstrate:
- Redirect and session assertions
- Role-based page content
- Interaction checks on the recorded API traffic
"""

"""
Integration tests that drive the harness over real HTTP.

A Flask stub of the PetClinic REST API is served on a loopback port
and a real Locust ``HttpSession`` sends the iteration's requests to it.
"""

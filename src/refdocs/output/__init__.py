"""Human and JSON rendering of ServiceResult payloads."""

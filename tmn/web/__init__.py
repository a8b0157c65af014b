"""Query-string parsing, the response envelope, and request and response schemas."""
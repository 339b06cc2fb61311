"""
dynamodb-etl: recode DynamoDB-style JSON exports into plain JSON.

Reads newline-delimited JSON records and replaces a base64+gzip encoded
field and a stringified JSON field with their decoded content.
"""

__version__ = "0.3.0"

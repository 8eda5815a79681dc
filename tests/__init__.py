"""
Unit and integration tests for the TestRail service client.

Test modules:
- unit/test_url_builder: Endpoint templates and URL building
- unit/test_parameters: Filters and ordered parameter rendering
- unit/test_entities: Entity (de)serialization and back-references
- unit/test_serialization: JSON codec
- unit/test_retry: 429 retry policy
- unit/test_http_client: requests based transport
- unit/test_service: Service facade operations
- unit/test_config: Settings loading
- integration/test_testrail_service_flow: End-to-end flows over a fake transport
"""

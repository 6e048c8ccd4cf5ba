from tests.mocks.mock_services import (
    FakeGeocoder,
    FakeIpLocator,
    FailingBlobStore,
    FlakyBlobStore,
    FailingDocumentStore,
)

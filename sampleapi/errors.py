class SampleError(Exception):
    pass


class SampleNotFound(SampleError):
    def __init__(self, sample_id) -> None:
        self.sample_id = sample_id
        super().__init__(f"Sample not found with id: {sample_id}")


class DuplicateIdentifier(SampleError):
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Sample identifier already exists: {identifier}")


class StorageFailure(SampleError):
    pass


class ConstraintViolation(StorageFailure):
    pass


class InvalidSort(SampleError):
    def __init__(self, sort: str, reason: str) -> None:
        self.sort = sort
        super().__init__(f"Invalid sort '{sort}': {reason}")

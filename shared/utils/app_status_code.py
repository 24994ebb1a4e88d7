class AppStatusCode:
    # success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    CREATED_SUCCESSFULLY = "101"
    UPDATED_SUCCESSFULLY = "102"
    DELETED_SUCCESSFULLY = "103"

    # validation
    REQUIRED_VALIDATION_ERROR = "200"
    INVALID_INPUT = "201"
    DUPLICATE_ADD_ERROR = "202"
    USER_USERNAME_IS_UNIQUE = "203"

    # authentication / authorization
    AUTHENTICATION_TOKEN_INVALID = "300"
    AUTHENTICATION_TOKEN_EXPIRED = "301"
    AUTHENTICATION_CREDENTIALS_INVALID = "302"
    AUTHENTICATION_USER_INVALID = "303"
    AUTHENTICATION_USER_INACTIVE = "304"
    UNAUTHORIZED_ACTION = "305"

    # data
    RECORD_NOT_FOUND = "400"
    RECORD_IMMUTABLE = "401"
    RECORD_IN_USE = "402"

    # failures
    OPERATION_ERROR = "500"
    OPERATION_FAILED = "501"
    STORAGE_ERROR = "502"

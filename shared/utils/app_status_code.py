class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    CREATED_SUCCESSFULLY = "101"
    UPDATED_SUCCESSFULLY = "102"

    # Generic failures
    OPERATION_FAILED = "200"
    INVALID_INPUT = "201"
    REQUIRED_VALIDATION_ERROR = "202"
    DUPLICATE_ADD_ERROR = "203"
    NOT_FOUND = "204"
    INVALID_STATE = "205"
    UNAUTHORIZED_ACTION = "206"

    # Authentication
    AUTHENTICATION_TOKEN_INVALID = "300"
    AUTHENTICATION_TOKEN_EXPIRED = "301"
    AUTHENTICATION_USER_INVALID = "302"
    AUTHENTICATION_CREDENTIALS_INVALID = "303"

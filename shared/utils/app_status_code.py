class AppStatusCode:
    # success
    DATA_RETRIEVED_SUCCESSFULLY = "200"
    CREATED_SUCCESSFULLY = "201"

    # authentication / authorization
    AUTHENTICATION_TOKEN_INVALID = "1001"
    AUTHENTICATION_TOKEN_EXPIRED = "1002"
    AUTHENTICATION_USER_INVALID = "1003"
    AUTHENTICATION_USER_INACTIVE = "1004"
    AUTHENTICATION_CREDENTIALS_INVALID = "1005"
    UNAUTHORIZED_ACTION = "1006"

    # input
    INVALID_INPUT = "2001"
    REQUIRED_VALIDATION_ERROR = "2002"
    DUPLICATE_ADD_ERROR = "2003"
    NOT_FOUND = "2004"

    # reservation lifecycle
    INVALID_STATUS_TRANSITION = "3001"
    ROOMS_UNAVAILABLE = "3002"
    ROOM_CONFLICT = "3003"

    # generic
    OPERATION_ERROR = "4001"
    OPERATION_FAILED = "5000"

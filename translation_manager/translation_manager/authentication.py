from rest_framework.authentication import TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """
    Token authentication that accepts ``Authorization: Bearer <token>``.
    """
    keyword = 'Bearer'

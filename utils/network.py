from starlette.requests import Request


def get_client_ip(request: Request) -> str:
    """
    요청에서 실제 클라이언트 IP 추출
    Nginx 프록시를 거치는 경우 X-Forwarded-For 첫 번째 값을 사용
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"

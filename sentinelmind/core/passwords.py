# sentinelmind/core/passwords.py
from passlib.context import CryptContext


class PasswordHasher:
    """bcrypt vía passlib. Nunca se guarda ni compara la contraseña en claro."""

    def __init__(self, rounds: int = 10):
        self._ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        # Hash fijo para igualar el coste cuando el usuario no existe
        self._dummy_hash = self._ctx.hash("sentinelmind-timing-equalizer")

    def hash(self, password: str) -> str:
        return self._ctx.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._ctx.verify(password, password_hash)
        except ValueError:
            # hash almacenado corrupto o con formato desconocido
            return False

    def dummy_verify(self, password: str) -> None:
        self._ctx.verify(password, self._dummy_hash)

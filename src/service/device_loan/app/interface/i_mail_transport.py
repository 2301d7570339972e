from abc import ABC, abstractmethod


class IMailTransport(ABC):
    @abstractmethod
    async def send(self, *, address: str, subject: str, body: str) -> None:
        """
        Deliver one message.

        Raises on any failure; returning normally means the message was accepted.
        """
        pass

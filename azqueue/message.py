from xml.sax.saxutils import escape as xml_escape


def encode_message(payload: str, escape: bool = True) -> str:
    """
    Wrap payload in the QueueMessage envelope.

    The envelope is small and static so it is built by hand. With
    escape=False the payload goes in verbatim and the caller is responsible
    for it being valid XML text.
    """
    text = xml_escape(payload) if escape else payload
    return (
        "<QueueMessage>\n"
        f"<MessageText>{text}</MessageText>\n"
        "</QueueMessage>"
    )

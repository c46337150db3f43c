import logging
from xml.etree import ElementTree as etree
from breakcheck.errors import DecodeError

logger = logging.getLogger()

def extract_last_build_date(data: bytes) -> str:
    '''
        returns the text of channel/lastBuildDate,
        an empty string if the element is absent or empty
    '''
    logger.debug('decoding news data')
    try:
        xml_root = etree.fromstring(data)
    except etree.ParseError as e:
        raise DecodeError('could not decode news feed') from e
    channel = xml_root.find('channel')
    if channel is None:
        raise DecodeError(f'news feed has no channel element under <{xml_root.tag}>')
    return (channel.findtext('lastBuildDate') or '').strip()

"""
Global constants for the MPEG-4 audio configuration codec.
These define descriptor tags from ISO/IEC 14496-1, audio object types from
ISO/IEC 14496-3 and the fixed ADTS header geometry.
"""

# ISO/IEC 14496-1 descriptor tags
MP4_ES_DESCR_TAG = 3
MP4_DEC_CONFIG_DESCR_TAG = 4
MP4_DEC_SPECIFIC_DESCR_TAG = 5

DESCRIPTOR_TAG_NAMES = {
    MP4_ES_DESCR_TAG: "MP4ESDescrTag",
    MP4_DEC_CONFIG_DESCR_TAG: "MP4DecConfigDescrTag",
    MP4_DEC_SPECIFIC_DESCR_TAG: "MP4DecSpecificDescrTag",
}

# Base-128 length field, at most 4 bytes on the wire
MAX_DESC_LENGTH_BYTES = 4
MAX_DESC_LENGTH = (1 << (7 * MAX_DESC_LENGTH_BYTES)) - 1

# ES_Descriptor flag bits
ES_FLAG_STREAM_DEPENDENCE = 0x80
ES_FLAG_URL = 0x40
ES_FLAG_OCR_STREAM = 0x20

# DecoderConfigDescriptor values written for AAC
OBJECT_TYPE_INDICATION_AAC = 0x40
STREAM_TYPE_AUDIO = 0x15

# MPEG-4 audio object types
AOT_AAC_MAIN = 1
AOT_AAC_LC = 2
AOT_AAC_SSR = 3
AOT_AAC_LTP = 4
AOT_SBR = 5
AOT_AAC_SCALABLE = 6
AOT_ER_AAC_LC = 17
AOT_ER_AAC_LD = 23
AOT_PS = 29
AOT_ESCAPE = 31
AOT_ALS = 36
AOT_ER_AAC_ELD = 39
AOT_USAC = 42

# Bit widths of the escape-coded AudioSpecificConfig fields
BITS_PER_OBJECT_TYPE = 5
BITS_PER_OBJECT_TYPE_EXT = 6
BITS_PER_SAMPLE_RATE_INDEX = 4
BITS_PER_EXPLICIT_SAMPLE_RATE = 24
BITS_PER_CHANNEL_CONFIG = 4

SAMPLE_RATE_INDEX_ESCAPE = 0xF
MAX_OBJECT_TYPE = 32 + (1 << BITS_PER_OBJECT_TYPE_EXT) - 1

# ADTS
ADTS_SYNC_WORD = 0xFFF
ADTS_HEADER_SIZE = 7
ADTS_HEADER_SIZE_CRC = 9

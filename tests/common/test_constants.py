import unittest
from pyisom.common import constants as c


class TestDescriptorConstants(unittest.TestCase):
    def test_descriptor_tags(self):
        self.assertEqual(c.MP4_ES_DESCR_TAG, 3, "ES_Descriptor tag should be 3")
        self.assertEqual(
            c.MP4_DEC_CONFIG_DESCR_TAG, 4, "DecoderConfigDescriptor tag should be 4"
        )
        self.assertEqual(
            c.MP4_DEC_SPECIFIC_DESCR_TAG, 5, "DecoderSpecificInfo tag should be 5"
        )

    def test_tag_names(self):
        self.assertEqual(c.DESCRIPTOR_TAG_NAMES[c.MP4_ES_DESCR_TAG], "MP4ESDescrTag")

    def test_max_desc_length(self):
        self.assertEqual(
            c.MAX_DESC_LENGTH, 0x0FFFFFFF, "Four base-128 bytes hold 28 bits"
        )

    def test_aac_decoder_config_values(self):
        self.assertEqual(c.OBJECT_TYPE_INDICATION_AAC, 0x40)
        self.assertEqual(c.STREAM_TYPE_AUDIO, 0x15)

    def test_es_flags(self):
        self.assertEqual(
            (c.ES_FLAG_STREAM_DEPENDENCE, c.ES_FLAG_URL, c.ES_FLAG_OCR_STREAM),
            (0x80, 0x40, 0x20),
        )


class TestAudioConfigConstants(unittest.TestCase):
    def test_object_types(self):
        self.assertEqual(c.AOT_AAC_MAIN, 1)
        self.assertEqual(c.AOT_AAC_LC, 2)
        self.assertEqual(c.AOT_ESCAPE, 31, "Object type escape sentinel should be 31")
        self.assertEqual(c.AOT_ER_AAC_ELD, 39)

    def test_max_object_type(self):
        self.assertEqual(
            c.MAX_OBJECT_TYPE, 63, "5+6 bit escape coding reaches object type 63"
        )

    def test_sample_rate_escape(self):
        self.assertEqual(c.SAMPLE_RATE_INDEX_ESCAPE, 0xF)
        self.assertEqual(c.BITS_PER_EXPLICIT_SAMPLE_RATE, 24)

    def test_adts_sizes(self):
        self.assertEqual(c.ADTS_HEADER_SIZE, 7)
        self.assertEqual(c.ADTS_HEADER_SIZE_CRC, 9)
        self.assertEqual(c.ADTS_SYNC_WORD, 0xFFF)


if __name__ == "__main__":
    unittest.main()

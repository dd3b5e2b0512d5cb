from unittest import TestCase

from cloud_admin.common.logger import get_logger
from cloud_admin.common.tracing import Span


class TestUnitTracing(TestCase):
    def test_happy_path(self):
        span = Span(origin=self)

        self.assertEqual(32, len(span.trace_id))
        self.assertEqual(16, len(span.span_id))
        self.assertEqual(f'{__name__}.{type(self).__name__}', span.origin)
        self.assertIsNone(span.parent)

        with span.new_span(metadata=dict(operation='list')) as span_1:
            self.assertEqual(span.trace_id, span_1.trace_id)
            self.assertIs(span, span_1.parent)
            self.assertEqual(span.origin, span_1.origin)
            self.assertNotEqual(span.span_id, span_1.span_id)

            with span_1.new_span() as span_1_1:
                self.assertEqual(span.trace_id, span_1_1.trace_id)
                self.assertIs(span_1, span_1_1.parent)

        self.assertFalse(span_1.active)
        self.assertTrue(span.active)
        self.assertEqual([span_1], span.children)

    def test_span_logger(self):
        span = Span(origin='sample')
        logger = span.create_span_logger(get_logger('sample'))

        self.assertEqual(f'sample,{span.trace_id},{span.span_id}', logger.name)

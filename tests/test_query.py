import unittest

from libpuppetdb import ErrorCode, Query, QueryError


class QueryTests(unittest.TestCase):
    def test_valid_query_without_query_string(self):
        query = Query("facts")

        self.assertTrue(query.is_valid())
        self.assertEqual(query.get_endpoint(), "facts")
        self.assertEqual(query.get_query_string(), "")
        self.assertEqual(query.format(), "facts")
        self.assertEqual(str(query), "facts")

    def test_valid_query_with_query_string(self):
        query = Query("nodes", "puppetdb_query")

        self.assertTrue(query.is_valid())
        self.assertEqual(query.endpoint, "nodes")
        self.assertEqual(query.query_string, "puppetdb_query")
        self.assertEqual(query.format(), "nodes?query=puppetdb_query")

    def test_format_does_not_encode_query_string(self):
        query = Query("nodes", '["=", "name", "master"]')

        self.assertEqual(query.format(), 'nodes?query=["=", "name", "master"]')

    def test_empty_endpoint_raises(self):
        with self.assertRaises(QueryError):
            Query("")

        with self.assertRaises(QueryError) as ctx:
            Query("", "puppetdb_query")
        self.assertEqual(str(ctx.exception), "no endpoint specified")
        self.assertEqual(ctx.exception.error_code, ErrorCode.INVALID_QUERY)

    def test_error_code_defaults_to_ok_and_can_be_set(self):
        query = Query("spam")
        self.assertEqual(query.error_code, ErrorCode.OK)

        query.error_code = ErrorCode.PROCESSING_FAILED
        self.assertEqual(query.error_code, ErrorCode.PROCESSING_FAILED)

    def test_identical_inputs_give_equal_queries(self):
        first = Query("nodes", "bar")
        second = Query("nodes", "bar")

        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))
        self.assertEqual(first.format(), second.format())
        self.assertNotEqual(first, Query("nodes", "baz"))

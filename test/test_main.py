import argparse
import io
import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch
from jsavro.jsavro import main

STORE_PATH = os.path.join(tempfile.gettempdir(), 'jsavro-test-store')

def get_json():
    """Provides the JSON schema input file path."""
    return os.path.join(os.path.dirname(__file__), 'jsons', 'person.json')

def get_instance(name):
    """Writes a JSON instance file and returns its path."""
    file_path = os.path.join(tempfile.gettempdir(), name)
    with open(file_path, 'w', encoding='utf-8') as f:
        if name.startswith('valid'):
            json.dump({'name': 'Jane', 'address': {'street': 'Main St', 'city': 'Springfield'}}, f)
        else:
            json.dump({'name': 'Jane', 'age': 'unknown'}, f)
    return file_path


class TestMain(unittest.TestCase):

    def setUp(self):
        shutil.rmtree(STORE_PATH, ignore_errors=True)

    def tearDown(self):
        shutil.rmtree(STORE_PATH, ignore_errors=True)

    def register(self):
        with patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='register', input=get_json(), type='person', schema_version='1.0', store=STORE_PATH)):
            main()

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None))
    def test_main_no_command(self, mock_parse_args):
        """Test main function with no command."""
        with patch('builtins.print') as mock_print:
            main()

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None, version=True))
    def test_main_version(self, mock_parse_args):
        """Test main function with --version."""
        with patch('builtins.print') as mock_print:
            main()
        mock_print.assert_called_once_with('jsavro 0.1.0')

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='j2a', input=get_json(), out=tempfile.gettempdir() + '/output.avsc', name='Person', namespace=None))
    def test_main_j2a_command(self, mock_parse_args):
        """Test main function with j2a command."""
        main()
        assert os.path.exists(tempfile.gettempdir() + '/output.avsc')
        with open(tempfile.gettempdir() + '/output.avsc', 'r', encoding='utf-8') as f:
            avro_schema = json.load(f)
        assert avro_schema['name'] == 'Person'

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='j2a', input=get_json(), out=None, name=None, namespace='com.example'))
    def test_main_j2a_command_to_stdout(self, mock_parse_args):
        """Test main function with j2a command writing to stdout."""
        with patch('sys.stdout', new_callable=io.StringIO) as mock_stdout:
            main()
        avro_schema = json.loads(mock_stdout.getvalue())
        assert avro_schema['name'] == 'Person'
        assert avro_schema['namespace'] == 'com.example'

    def test_main_register_and_list_commands(self):
        """Test main function with register and list commands."""
        self.register()
        with open(os.path.join(STORE_PATH, 'schemas.json'), 'r', encoding='utf-8') as f:
            assert json.load(f)[0]['type'] == 'person'
        with patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='list', store=STORE_PATH)):
            with patch('builtins.print') as mock_print:
                main()
        mock_print.assert_called_once_with('1\tperson\t1.0')

    def test_main_register_duplicate(self):
        """Test main function with a duplicate register command."""
        self.register()
        with self.assertRaises(SystemExit) as cm:
            with patch('builtins.print'):
                self.register()
        self.assertEqual(cm.exception.code, 1)

    def test_main_validate_command(self):
        """Test main function with validate command."""
        self.register()
        with patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='validate', input=get_instance('valid.json'), type='person', schema_version='1.0', store=STORE_PATH, quiet=True)):
            main()
        with patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='validate', input=get_instance('invalid.json'), type='person', schema_version='1.0', store=STORE_PATH, quiet=True)):
            with self.assertRaises(SystemExit) as cm:
                main()
        self.assertEqual(cm.exception.code, 1)

    def test_main_avro_command(self):
        """Test main function with avro command."""
        self.register()
        out = tempfile.gettempdir() + '/person.avsc'
        with patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='avro', type='person', schema_version='1.0', store=STORE_PATH, out=out)):
            main()
        with open(out, 'r', encoding='utf-8') as f:
            avro_schema = json.load(f)
        assert avro_schema['type'] == 'record'
        assert avro_schema['name'] == 'Person'

    def test_main_avro_command_message_omits_input(self):
        """Test the avro command reports only its output file."""
        self.register()
        out = tempfile.gettempdir() + '/person-message.avsc'
        with patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='avro', type='person', schema_version='1.0', store=STORE_PATH, out=out)):
            with patch('builtins.print') as mock_print:
                main()
        messages = [str(c.args[0]) for c in mock_print.call_args_list if c.args]
        assert not any('input None' in m for m in messages)
        assert any(m.endswith(f'with output {out}') for m in messages)

    def test_main_avro_command_unknown_schema(self):
        """Test main function with avro command for a missing schema."""
        with patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='avro', type='missing', schema_version='1.0', store=STORE_PATH, out=None)):
            with patch('builtins.print') as mock_print:
                with self.assertRaises(SystemExit):
                    main()
        mock_print.assert_called_with("Error: ", "Schema not found for type 'missing' and version '1.0'")


if __name__ == '__main__':
    unittest.main()

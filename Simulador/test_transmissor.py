# Simulador/test_transmissor.py

import os
import tempfile
import unittest

import numpy as np
from Simulador.transmissor import run_transmitter
from CamadaFisica.modulacoes_digitais import InvalidSchemeError, LineCodingScheme
from Utilidades.utils import SinkUnavailableError


class TestRunTransmitter(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.data_file = os.path.join(self.tmp.name, "signal.dat")
        self.updates = []

    def params(self, **kwargs):
        params = {
            "bits": "11011",
            "scheme": 3,
            "data_file": self.data_file,
            "image_file": os.path.join(self.tmp.name, "signal.png"),
            "gui_callback": self.updates.append,
        }
        params.update(kwargs)
        return params

    def test_fluxo_completo(self):
        resultado = run_transmitter(self.params())
        self.assertIs(resultado['scheme'], LineCodingScheme.BIPOLAR_AMI)
        np.testing.assert_array_equal(resultado['levels'], [1, -1, 0, 1, -1])
        with open(self.data_file, encoding="utf-8") as f:
            linhas = f.read().splitlines()
        self.assertEqual(len(linhas), len(resultado['points']))
        self.assertEqual(linhas[0], "0 1")
        self.assertEqual(linhas[-1], "5 -1")
        self.assertIn(f"plot '{self.data_file}' with lines title 'Signal'", resultado['script'])
        self.assertEqual(self.updates[-1]['type'], 'status')

    def test_execucoes_independentes_nao_compartilham_polaridade(self):
        primeiro = run_transmitter(self.params(bits="1"))
        segundo = run_transmitter(self.params(bits="1"))
        np.testing.assert_array_equal(primeiro['levels'], segundo['levels'])

    def test_entrada_vazia(self):
        for scheme in LineCodingScheme:
            resultado = run_transmitter(self.params(bits="", scheme=scheme))
            self.assertEqual(len(resultado['levels']), 0)
            self.assertEqual(resultado['points'], [])
            self.assertEqual(os.path.getsize(self.data_file), 0)

    def test_esquema_invalido_nao_grava_nada(self):
        with self.assertRaises(InvalidSchemeError):
            run_transmitter(self.params(scheme=5))
        self.assertFalse(os.path.exists(self.data_file))
        self.assertNotIn('plot_digital', [u['type'] for u in self.updates])

    def test_destino_indisponivel(self):
        data_file = os.path.join(self.tmp.name, "sem_pasta", "signal.dat")
        with self.assertRaises(SinkUnavailableError):
            run_transmitter(self.params(data_file=data_file))

    def test_script_em_pasta_inexistente(self):
        script_file = os.path.join(self.tmp.name, "sem_pasta", "signal.gp")
        with self.assertRaises(SinkUnavailableError):
            run_transmitter(self.params(script_file=script_file))
        self.assertFalse(os.path.exists(script_file))

    def test_imagem_em_pasta_inexistente(self):
        import matplotlib
        matplotlib.use("Agg")
        image_file = os.path.join(self.tmp.name, "sem_pasta", "signal.png")
        with self.assertRaises(SinkUnavailableError):
            run_transmitter(self.params(image_file=image_file, render=True))
        self.assertFalse(os.path.exists(image_file))

    def test_script_e_imagem(self):
        import matplotlib
        matplotlib.use("Agg")
        script_file = os.path.join(self.tmp.name, "signal.gp")
        resultado = run_transmitter(self.params(scheme="1", script_file=script_file, render=True))
        with open(script_file, encoding="utf-8") as f:
            self.assertEqual(f.read(), resultado['script'])
        self.assertIn("set yrange [-0.5:1.5]", resultado['script'])
        self.assertTrue(os.path.exists(resultado['config'].image_file))


if __name__ == '__main__':
    unittest.main()

"""
Unit tests for the weight-vector genes and the weight operators.
"""

import json
import pytest
import numpy as np

from evobrain.errors                    import InvariantViolation, LoadError
from evobrain.genotype.weight_gene      import (FeedforwardGene, LstmGene, LstmLiteGene,
                                                LstmWeightId, LstmLiteWeightId)
from evobrain.genotype.weight_operators import crossover_weights, mutate_weights, randomize_weights


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def rng():
    return np.random.default_rng(11)


def random_gene(gene_class, inputs, outputs, seed):
    gene = gene_class(inputs, outputs)
    gene.randomize(np.random.default_rng(seed))
    return gene


# ============================================================================
# Test Weight Operators
# ============================================================================

class TestWeightOperators:

    def test_randomize_within_range(self, rng):
        w = np.zeros((50, 20))
        randomize_weights(w, rng, 0.5)
        assert np.all(np.abs(w) <= 0.5)
        assert np.any(w != 0.0)

    def test_mutate_zero_std_dev_is_noop(self, rng):
        w = np.arange(6, dtype=np.float64).reshape(2, 3)
        mutate_weights(w, 0.0, rng)
        np.testing.assert_array_equal(w, np.arange(6).reshape(2, 3))

    def test_mutate_perturbs_every_weight(self, rng):
        w = np.zeros((4, 4))
        mutate_weights(w, 1.0, rng)
        assert np.all(w != 0.0)

    def test_negative_std_dev_is_fatal(self, rng):
        with pytest.raises(InvariantViolation):
            mutate_weights(np.zeros((2, 2)), -1.0, rng)

    def test_uniform_crossover_picks_parent_values(self, rng):
        parent1 = np.full((10, 10), 1.0)
        parent2 = np.full((10, 10), 2.0)
        child   = np.zeros((10, 10))
        crossover_weights(child, parent1, parent2, 0.5, rng, 'uniform')
        assert np.all((child == 1.0) | (child == 2.0))
        assert np.any(child == 1.0) and np.any(child == 2.0)

    @pytest.mark.parametrize("preference, expected", [(1.0, 1.0), (0.0, 2.0)])
    def test_uniform_crossover_extreme_preference(self, rng, preference, expected):
        child = np.zeros((3, 3))
        crossover_weights(child, np.full((3, 3), 1.0), np.full((3, 3), 2.0), preference, rng, 'uniform')
        np.testing.assert_array_equal(child, expected)

    def test_blend_crossover_interpolates(self, rng):
        child = np.zeros((2, 2))
        crossover_weights(child, np.full((2, 2), 1.0), np.full((2, 2), 3.0), 0.25, rng, 'blend')
        np.testing.assert_allclose(child, 0.25 * 1.0 + 0.75 * 3.0)

    def test_mismatched_shapes_are_fatal(self, rng):
        with pytest.raises(InvariantViolation):
            crossover_weights(np.zeros((2, 2)), np.zeros((2, 2)), np.zeros((3, 2)), 0.5, rng)

    @pytest.mark.parametrize("preference", [-0.1, 1.1])
    def test_preference_out_of_range_is_fatal(self, rng, preference):
        with pytest.raises(InvariantViolation):
            crossover_weights(np.zeros((2, 2)), np.zeros((2, 2)), np.zeros((2, 2)), preference, rng)

    def test_unknown_operator_is_fatal(self, rng):
        with pytest.raises(InvariantViolation):
            crossover_weights(np.zeros((2, 2)), np.zeros((2, 2)), np.zeros((2, 2)), 0.5, rng, 'one_point')


# ============================================================================
# Test FeedforwardGene
# ============================================================================

class TestFeedforwardGene:

    def test_shape_includes_bias_row(self):
        gene = FeedforwardGene(2, 3)
        assert gene.w.shape == (3, 3)
        assert gene.inputs == 2
        assert gene.outputs == 3
        assert np.all(gene.w == 0.0)

    def test_mutate_changes_weights(self, rng):
        gene = random_gene(FeedforwardGene, 2, 3, 1)
        before = gene.w.copy()
        gene.mutate(0.1, rng)
        assert not np.array_equal(gene.w, before)

    def test_crossover(self, rng):
        parent1 = random_gene(FeedforwardGene, 2, 3, 1)
        parent2 = random_gene(FeedforwardGene, 2, 3, 2)
        child   = FeedforwardGene(2, 3)
        child.crossover(parent1, parent2, 1.0, rng)
        assert child == parent1

    def test_round_trip_is_exact(self):
        gene   = random_gene(FeedforwardGene, 2, 3, 1)
        loaded = FeedforwardGene.from_dict(json.loads(json.dumps(gene.to_dict())), 2, 3)
        assert loaded == gene
        assert loaded.w.dtype == np.float64

    def test_wrong_shape_is_rejected(self):
        gene = random_gene(FeedforwardGene, 2, 3, 1)
        with pytest.raises(LoadError, match="shape"):
            FeedforwardGene.from_dict(gene.to_dict(), 3, 3)

    @pytest.mark.parametrize("json_obj", [
        {},
        {"w": 1.0},
        {"w": [1.0, 2.0]},
        {"w": [[1.0, 2.0], [3.0]]},
        {"w": [["a", "b"]]},
        [[1.0]],
    ])
    def test_malformed_gene_is_rejected(self, json_obj):
        with pytest.raises(LoadError):
            FeedforwardGene.from_dict(json_obj, 0, 2)

    def test_genes_of_different_types_are_not_equal(self):
        assert FeedforwardGene(2, 3) != LstmLiteGene(2, 3)


# ============================================================================
# Test Recurrent Genes
# ============================================================================

class TestRecurrentGenes:

    @pytest.mark.parametrize("gene_class, num_weights", [(LstmGene, len(LstmWeightId)),
                                                          (LstmLiteGene, len(LstmLiteWeightId))])
    def test_gate_weight_shape(self, gene_class, num_weights):
        gene = gene_class(2, 3)
        assert gene.lw.shape == (3, num_weights)

    def test_weight_layouts(self):
        assert len(LstmWeightId) == 12
        assert len(LstmLiteWeightId) == 4

    @pytest.mark.parametrize("gene_class", [LstmGene, LstmLiteGene])
    def test_randomize_covers_gate_weights(self, gene_class):
        gene = random_gene(gene_class, 2, 3, 1)
        assert np.any(gene.lw != 0.0)

    @pytest.mark.parametrize("gene_class", [LstmGene, LstmLiteGene])
    def test_round_trip_is_exact(self, gene_class):
        gene   = random_gene(gene_class, 2, 3, 1)
        loaded = gene_class.from_dict(json.loads(json.dumps(gene.to_dict())), 2, 3)
        assert loaded == gene

    def test_gate_weights_differ(self):
        gene  = random_gene(LstmGene, 2, 3, 1)
        other = LstmGene.from_dict(gene.to_dict(), 2, 3)
        other.lw[0, 0] += 1.0
        assert other != gene

    def test_inconsistent_gate_weights_are_rejected(self):
        json_obj = random_gene(LstmGene, 2, 3, 1).to_dict()
        json_obj["lw"] = [row[:-1] for row in json_obj["lw"]]
        with pytest.raises(LoadError, match="inconsistent gate weights"):
            LstmGene.from_dict(json_obj, 2, 3)

    def test_gate_weights_for_wrong_number_of_units_are_rejected(self):
        json_obj = random_gene(LstmLiteGene, 2, 3, 1).to_dict()
        json_obj["lw"] = json_obj["lw"][:2]
        with pytest.raises(LoadError, match="inconsistent gate weights"):
            LstmLiteGene.from_dict(json_obj, 2, 3)

    def test_missing_gate_weights_are_rejected(self):
        json_obj = random_gene(LstmLiteGene, 2, 3, 1).to_dict()
        del json_obj["lw"]
        with pytest.raises(LoadError, match="lw"):
            LstmLiteGene.from_dict(json_obj, 2, 3)

    def test_crossover_combines_gate_weights(self, rng):
        parent1 = random_gene(LstmLiteGene, 2, 3, 1)
        parent2 = random_gene(LstmLiteGene, 2, 3, 2)
        child   = LstmLiteGene(2, 3)
        child.crossover(parent1, parent2, 0.5, rng, 'blend')
        np.testing.assert_allclose(child.lw, 0.5 * (parent1.lw + parent2.lw))
        np.testing.assert_allclose(child.w,  0.5 * (parent1.w  + parent2.w))

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
""" Spot diagram of ray impact points

.. Created on Thu Oct 15 22:02:44 2026

.. codeauthor: Michael H. Williamson
"""

import numpy as np
from matplotlib.figure import Figure

from lensy.util.misc_math import inner3, normalize


class SpotDiagramFigure(Figure):
    """ Scatter plot of the ray origins, i.e. the impact points on a surface

    If a :class:`~.elem.detector.Detector` is given, points are plotted in
    the detector frame, along its vx and vy axes, relative to its vertex.
    Otherwise the global x and y coordinates are used. Each point is drawn
    in the color tag of its ray.

    Attributes:
        rays: list of traced rays
        detector: optional detector defining the plot axes
        scale: multiplier applied to coordinates in meters
        units: axis label for the scaled units
    """

    def __init__(self, rays, detector=None, scale=1e3, units='mm',
                 title=None, **kwargs):
        self.rays = rays
        self.detector = detector
        self.scale = scale
        self.units = units
        self.plot_title = title
        super().__init__(**kwargs)
        self.update_data()

    def project(self, pt):
        """ 2d plot coordinates of the 3d point pt """
        if self.detector is None:
            return pt[0], pt[1]
        w = pt - self.detector.vertex
        return (inner3(w, normalize(self.detector.vx)),
                inner3(w, normalize(self.detector.vy)))

    def update_data(self, **kwargs):
        if len(self.rays) == 0:
            self.pts = np.zeros((0, 2))
            self.colors = np.zeros((0, 3))
        else:
            self.pts = self.scale*np.array([self.project(r.origin)
                                            for r in self.rays])
            self.colors = np.array([r.color for r in self.rays])/255.0
        return self

    def plot(self):
        if hasattr(self, 'ax'):
            self.clf()
        self.ax = self.add_subplot(1, 1, 1)
        self.ax.grid(True)
        if len(self.pts) > 0:
            self.ax.scatter(self.pts[:, 0], self.pts[:, 1], c=self.colors,
                            marker='o', s=4)
        self.ax.set_aspect('equal')
        self.ax.set_xlabel(f"x ({self.units})")
        self.ax.set_ylabel(f"y ({self.units})")
        if self.plot_title:
            self.ax.set_title(self.plot_title)

        self.canvas.draw()

        return self
